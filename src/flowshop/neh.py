# src/flowshop/neh.py
from __future__ import annotations
import logging
from typing import Callable, List, Sequence, Tuple, Union
import numpy as np

from .evaluation import JobRows, completion_row
from .instance import Instance, as_instance
from .models import InsertionStep, ScheduleResult

logger = logging.getLogger(__name__)

InsertFn = Callable[[JobRows, Sequence[int], int], Tuple[int, int]]


def neh_order(p_times: np.ndarray) -> np.ndarray:
    """Jobs by descending total processing time, ties by ascending index."""
    total = np.sum(p_times, axis=0)
    return np.argsort(-total, kind="stable").astype(np.int64)


# ---------- Insertion evaluators ----------
def best_insert_position(times: JobRows, seq: Sequence[int], job: int) -> Tuple[int, int]:
    """Greedy best insertion of `job` into `seq` by full recomputation (ties -> earliest pos)."""
    best_val = None
    best_pos = 0
    for pos in range(len(seq) + 1):
        cand = list(seq[:pos]) + [job] + list(seq[pos:])
        val = completion_row(cand, times)[-1]
        if best_val is None or val < best_val:
            best_val = val
            best_pos = pos
    return best_pos, int(best_val)


def head_matrix(times: JobRows, seq: Sequence[int], m: int) -> List[List[int]]:
    """``e[i][j]``: completion of the first ``i`` jobs of ``seq`` on machine ``j``."""
    e = [[0] * m]
    for job in seq:
        e.append(completion_row([job], times, e[-1]))
    return e


def tail_matrix(times: JobRows, seq: Sequence[int], m: int) -> List[List[int]]:
    """``q[i][j]``: time from the start of ``seq[i]`` on machine ``j`` until the end
    of ``seq[i:]``, computed right-to-left."""
    k = len(seq)
    q = [[0] * m for _ in range(k + 1)]
    for i in range(k - 1, -1, -1):
        p = times[seq[i]]
        below = q[i + 1]
        row = q[i]
        right = 0
        for j in range(m - 1, -1, -1):
            right = max(below[j], right) + p[j]
            row[j] = right
    return q


def fast_insert_position(times: JobRows, seq: Sequence[int], job: int) -> Tuple[int, int]:
    """Same choice as :func:`best_insert_position` using head/tail matrices.

    For position ``pos`` the inserted job completes at
    ``f[j] = max(e[pos][j], f[j-1]) + p[j]`` and the resulting makespan is
    ``max_j f[j] + q[pos][j]``.
    """
    m = len(times[job])
    e = head_matrix(times, seq, m)
    q = tail_matrix(times, seq, m)
    p = times[job]
    best_val = None
    best_pos = 0
    for pos in range(len(seq) + 1):
        head = e[pos]
        tail = q[pos]
        f = 0
        val = 0
        for j in range(m):
            f = max(head[j], f) + p[j]
            if f + tail[j] > val:
                val = f + tail[j]
        if best_val is None or val < best_val:
            best_val = val
            best_pos = pos
    return best_pos, int(best_val)


def build_by_insertion(times: JobRows, order: Sequence[int], insert: InsertFn) -> List[InsertionStep]:
    """Insert jobs of ``order`` one by one at the position chosen by ``insert``."""
    seq: List[int] = []
    steps: List[InsertionStep] = []
    for k, job in enumerate(order):
        pos, val = insert(times, seq, int(job))
        seq.insert(pos, int(job))
        steps.append(InsertionStep(job=int(job), position=pos, makespan=val))
        logger.debug("neh step k=%d job=%d pos=%d cmax=%d", k, job, pos, val)
    return steps


def insertion_trace(jobs: Union[Instance, JobRows], accelerated: bool = False) -> List[InsertionStep]:
    inst = as_instance(jobs)
    if inst.n == 0:
        return []
    insert = fast_insert_position if accelerated else best_insert_position
    return build_by_insertion(inst.times, neh_order(inst.p_times), insert)


def _replay(steps: Sequence[InsertionStep]) -> List[int]:
    seq: List[int] = []
    for step in steps:
        seq.insert(step.position, step.job)
    return seq


def _run(jobs: Union[Instance, JobRows], accelerated: bool) -> ScheduleResult:
    steps = insertion_trace(jobs, accelerated=accelerated)
    if not steps:
        return ScheduleResult(permutation=[], makespan=0, iterations=0)
    trials = sum(k + 1 for k in range(len(steps)))
    return ScheduleResult(permutation=_replay(steps), makespan=steps[-1].makespan, iterations=trials)


def neh(jobs: Union[Instance, JobRows]) -> ScheduleResult:
    """Classic NEH with a full makespan evaluation per trial position."""
    return _run(jobs, accelerated=False)


def fast_neh(jobs: Union[Instance, JobRows]) -> ScheduleResult:
    """NEH with prefix/suffix acceleration; identical output to :func:`neh`."""
    return _run(jobs, accelerated=True)
