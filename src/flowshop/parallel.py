# src/flowshop/parallel.py
"""Identical parallel machines (P||Cmax): LPT, round robin and exact DP.

Standalone sibling of the flow-shop core; input text is ``n`` followed by
``n`` processing times.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .errors import MalformedInput, WrongMachineCount
from .instance import read_ints


@dataclass(frozen=True)
class ParallelResult:
    assignment: List[List[int]] = field(default_factory=list)  # task indices per machine
    makespan: int = 0


def parse_parallel(text: str, name: str = "parallel") -> List[int]:
    values = read_ints(text, name)
    if not values or values[0] < 0:
        raise MalformedInput(f"{name}: expected a non-negative task count")
    times = values[1:]
    if len(times) != values[0]:
        raise MalformedInput(f"{name}: expected {values[0]} processing times, got {len(times)}")
    if any(v < 0 for v in times):
        raise MalformedInput(f"{name}: processing times must be non-negative")
    return times


def _result(times: Sequence[int], assignment: List[List[int]]) -> ParallelResult:
    loads = [sum(times[i] for i in tasks) for tasks in assignment]
    return ParallelResult(assignment=assignment, makespan=max(loads, default=0))


def _check_machines(machines: int) -> None:
    if machines < 1:
        raise WrongMachineCount(f"need at least one machine, got {machines}")


def lpt(times: Sequence[int], machines: int) -> ParallelResult:
    """Longest processing time first onto the least loaded machine (ties -> lower index)."""
    _check_machines(machines)
    order = sorted(range(len(times)), key=lambda i: (-times[i], i))
    assignment: List[List[int]] = [[] for _ in range(machines)]
    loads = [0] * machines
    for i in order:
        k = loads.index(min(loads))
        assignment[k].append(i)
        loads[k] += times[i]
    return _result(times, assignment)


def lsa(times: Sequence[int], machines: int) -> ParallelResult:
    """Round robin in input order."""
    _check_machines(machines)
    assignment: List[List[int]] = [[] for _ in range(machines)]
    for i in range(len(times)):
        assignment[i % machines].append(i)
    return _result(times, assignment)


def partition_dp(times: Sequence[int], machines: int) -> ParallelResult:
    """Exact assignment for 2 or 3 machines by subset-sum dynamic programming.

    States are the loads of the first ``machines - 1`` machines; the last
    machine takes the remainder. Each state keeps the task that created it so
    the assignment can be rebuilt.
    """
    if machines not in (2, 3):
        raise WrongMachineCount(f"partition DP supports 2 or 3 machines, got {machines}")
    total = sum(times)
    start: Tuple[int, ...] = (0,) * (machines - 1)
    # layer[i]: state -> (previous state, machine that received task i)
    layers: List[Dict[Tuple[int, ...], Tuple[Tuple[int, ...], int]]] = []
    states = {start}
    for p in times:
        layer: Dict[Tuple[int, ...], Tuple[Tuple[int, ...], int]] = {}
        for s in sorted(states):
            for k in range(machines):
                nxt = s if k == machines - 1 else s[:k] + (s[k] + p,) + s[k+1:]
                if nxt not in layer:
                    layer[nxt] = (s, k)
        layers.append(layer)
        states = set(layer)

    best = min(sorted(states), key=lambda s: max(s + (total - sum(s),)))
    assignment: List[List[int]] = [[] for _ in range(machines)]
    state = best
    for i in range(len(times) - 1, -1, -1):
        prev, k = layers[i][state]
        assignment[k].append(i)
        state = prev
    for tasks in assignment:
        tasks.reverse()
    return _result(times, assignment)
