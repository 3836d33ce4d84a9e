# src/flowshop/evaluation.py
"""Makespan (Cmax) evaluation for permutation schedules.

Every solver in the package is checked against :func:`evaluate_cmax`; the
unchecked helpers below are the tight loops the solvers call internally.
"""
from __future__ import annotations
import operator
from typing import List, Sequence, Union
import numpy as np

from .errors import DimensionMismatch, InvalidPermutation
from .instance import Instance, as_instance

JobRows = Sequence[Sequence[int]]


# ---------- Core PFSP recurrence ----------
def completion_matrix(order: Sequence[int], p_times: np.ndarray) -> np.ndarray:
    """Return the n x m completion table ``C[position, machine]``."""
    m = p_times.shape[0]
    n = len(order)
    C = np.zeros((n, m), dtype=np.int64)
    for i, job in enumerate(order):
        for j in range(m):
            above = C[i-1, j] if i > 0 else 0
            left = C[i, j-1] if j > 0 else 0
            C[i, j] = max(above, left) + p_times[j, job]
    return C


def completion_row(order: Sequence[int], times: JobRows, row: Sequence[int] | None = None) -> List[int]:
    """Last row of the completion table, starting from ``row`` if given.

    ``times`` is job-major (``times[job][machine]``).
    """
    m = len(row) if row is not None else len(times[0])
    current = list(row) if row is not None else [0] * m
    for job in order:
        p = times[job]
        left = 0
        for j in range(m):
            c = current[j]
            if left > c:
                c = left
            left = c + p[j]
            current[j] = left
    return current


def makespan(order: Sequence[int], p_times: np.ndarray) -> int:
    """Unchecked Cmax of ``order`` on a ``(machines, jobs)`` matrix."""
    if len(order) == 0:
        return 0
    times = p_times.T.tolist()
    return int(completion_row(order, times)[-1])


def validate_permutation(n: int, permutation: Sequence[int]) -> bool:
    if len(permutation) != n:
        raise DimensionMismatch(f"permutation has {len(permutation)} entries, instance has {n} jobs")
    seen = [False] * n
    for idx in permutation:
        if not (0 <= idx < n):
            raise InvalidPermutation(f"job index out of range: {idx}")
        if seen[idx]:
            raise InvalidPermutation(f"duplicate job index: {idx}")
        seen[idx] = True
    return True


def evaluate_cmax(jobs: Union[Instance, JobRows], permutation: Sequence[int]) -> int:
    """Validated makespan of ``permutation`` on ``jobs``.

    Raises:
        DimensionMismatch: job rows of unequal length, or a permutation whose
            length differs from the number of jobs.
        InvalidPermutation: duplicate, out-of-range or non-integer job index.
    """
    inst = as_instance(jobs)
    try:
        perm = [operator.index(x) for x in permutation]
    except TypeError:
        raise InvalidPermutation(f"job indices must be integers: {list(permutation)!r}") from None
    validate_permutation(inst.n, perm)
    if not perm:
        return 0
    return int(completion_row(perm, inst.times)[-1])
