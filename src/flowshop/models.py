"""Result records returned by the solvers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ScheduleResult:
    """Job order plus objective value.

    Fields:
        permutation: Job indices in processing order (original identifiers).
        makespan: Cmax of ``permutation``.
        iterations: Work counter of the producing algorithm (permutations
            evaluated, search nodes expanded or insertion trials).
    """

    permutation: List[int] = field(default_factory=list)
    makespan: int = 0
    iterations: int = 0


@dataclass(frozen=True)
class InsertionStep:
    """One NEH step: ``job`` inserted at ``position`` giving ``makespan``."""

    job: int
    position: int
    makespan: int
