# src/flowshop/exact.py
"""Exact solvers: lexicographic brute force and branch and bound.

Both refuse instances above ``MAX_EXACT_JOBS`` jobs (or a caller supplied
limit) by raising :class:`~flowshop.errors.TooManyJobs` before any search
work is done.
"""
from __future__ import annotations
import itertools
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .errors import InvalidPermutation, TooManyJobs
from .evaluation import JobRows, completion_row
from .instance import Instance, as_instance
from .models import ScheduleResult
from .neh import fast_neh

logger = logging.getLogger(__name__)

MAX_EXACT_JOBS = 11


def _check_limit(n: int, max_jobs: int) -> None:
    if n > max_jobs:
        raise TooManyJobs(n, max_jobs)


def brute_force(jobs: Union[Instance, JobRows], max_jobs: int = MAX_EXACT_JOBS) -> ScheduleResult:
    """Evaluate all n! permutations in lexicographic order; first minimum wins."""
    inst = as_instance(jobs)
    _check_limit(inst.n, max_jobs)
    if inst.n == 0:
        return ScheduleResult(permutation=[], makespan=0, iterations=1)
    times = inst.times
    best_perm: Optional[Tuple[int, ...]] = None
    best_val = 0
    count = 0
    for perm in itertools.permutations(range(inst.n)):
        count += 1
        val = completion_row(perm, times)[-1]
        if best_perm is None or val < best_val:
            best_val = val
            best_perm = perm
    logger.debug("brute force: %d permutations, best=%d", count, best_val)
    return ScheduleResult(permutation=list(best_perm), makespan=int(best_val), iterations=count)


@dataclass(frozen=True)
class SearchFrame:
    """Node of the branch-and-bound tree.

    Fields:
        prefix: Jobs scheduled so far, in order.
        row: Completion time of the last prefix job on every machine.
        remaining: Bitmask of unscheduled jobs.
        tail: Per-machine sum of the unscheduled jobs' processing times.
    """

    prefix: Tuple[int, ...]
    row: Tuple[int, ...]
    remaining: int
    tail: Tuple[int, ...]

    @property
    def depth(self) -> int:
        return len(self.prefix)

    @property
    def bound(self) -> int:
        return lower_bound(self.row, self.tail)

    def child(self, job: int, times: JobRows) -> "SearchFrame":
        p = times[job]
        return SearchFrame(
            prefix=self.prefix + (job,),
            row=tuple(completion_row((job,), times, self.row)),
            remaining=self.remaining & ~(1 << job),
            tail=tuple(t - pj for t, pj in zip(self.tail, p)),
        )


def lower_bound(row: Sequence[int], tail: Sequence[int]) -> int:
    """Machine-based bound ``max_j row[j] + tail[j]``.

    Each machine must still process all remaining jobs after the prefix has
    left it, so no completion of the prefix can finish earlier.
    """
    return max((r + t for r, t in zip(row, tail)), default=0)


def root_frame(inst: Instance) -> SearchFrame:
    return SearchFrame(
        prefix=(),
        row=(0,) * inst.m,
        remaining=(1 << inst.n) - 1,
        tail=tuple(int(v) for v in inst.p_times.sum(axis=1)),
    )


def frame_for_prefix(jobs: Union[Instance, JobRows], prefix: Sequence[int]) -> SearchFrame:
    inst = as_instance(jobs)
    frame = root_frame(inst)
    for job in prefix:
        if not (0 <= job < inst.n):
            raise InvalidPermutation(f"job index out of range: {job}")
        if not frame.remaining & (1 << job):
            raise InvalidPermutation(f"duplicate job index: {job}")
        frame = frame.child(int(job), inst.times)
    return frame


def prefix_lower_bound(jobs: Union[Instance, JobRows], prefix: Sequence[int]) -> int:
    """Bound used by :func:`branch_and_bound` for any completion of ``prefix``."""
    return frame_for_prefix(jobs, prefix).bound


def branch_and_bound(
    jobs: Union[Instance, JobRows],
    max_jobs: int = MAX_EXACT_JOBS,
    initial: Optional[str] = "neh",
) -> ScheduleResult:
    """Depth-first branch and bound over an explicit stack of frames.

    Args:
        jobs: Instance or job rows.
        max_jobs: Job-count ceiling; larger instances raise ``TooManyJobs``.
        initial: ``"neh"`` seeds the incumbent with the fast NEH result,
            ``None`` starts from an infinite incumbent.

    Returns:
        ScheduleResult whose ``iterations`` is the number of expanded frames.
    """
    inst = as_instance(jobs)
    _check_limit(inst.n, max_jobs)
    if inst.n == 0:
        return ScheduleResult(permutation=[], makespan=0, iterations=0)
    if initial not in (None, "neh"):
        raise ValueError(f"Unknown initial incumbent '{initial}'. Use 'neh' or None")

    times = inst.times
    if initial == "neh":
        seed = fast_neh(inst)
        best_perm: Optional[List[int]] = list(seed.permutation)
        best_val: Optional[int] = seed.makespan
    else:
        best_perm, best_val = None, None

    expanded = 0
    pruned = 0
    stack: List[SearchFrame] = [root_frame(inst)]
    while stack:
        frame = stack.pop()
        if best_val is not None and frame.bound >= best_val:
            # incumbent improved since this frame was pushed
            pruned += 1
            continue
        expanded += 1
        if frame.remaining == 0:
            cmax = frame.row[-1]
            if best_val is None or cmax < best_val:
                best_val, best_perm = cmax, list(frame.prefix)
            continue
        children: List[SearchFrame] = []
        for job in range(inst.n):
            if not frame.remaining & (1 << job):
                continue
            child = frame.child(job, times)
            if best_val is not None and child.bound >= best_val:
                pruned += 1
                continue
            children.append(child)
        # reversed so the smallest job index is popped first
        stack.extend(reversed(children))

    logger.debug("branch and bound: expanded=%d pruned=%d best=%s", expanded, pruned, best_val)
    assert best_perm is not None and best_val is not None
    return ScheduleResult(permutation=best_perm, makespan=int(best_val), iterations=expanded)
