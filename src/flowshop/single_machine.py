# src/flowshop/single_machine.py
"""Single machine with release (r) and delivery (q) times: Schrage's rule.

Standalone sibling of the flow-shop core; it shares only the whitespace
integer text format (``n`` followed by ``n`` lines ``r p q``).
"""
from __future__ import annotations
import heapq
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import MalformedInput
from .instance import read_ints


@dataclass(frozen=True)
class RPQTask:
    index: int
    r: int
    p: int
    q: int


def parse_rpq(text: str, name: str = "rpq") -> List[RPQTask]:
    values = read_ints(text, name)
    if not values or values[0] < 0:
        raise MalformedInput(f"{name}: expected a non-negative task count")
    n = values[0]
    body = values[1:]
    if len(body) != 3 * n:
        raise MalformedInput(f"{name}: expected {3 * n} values, got {len(body)}")
    if any(v < 0 for v in body):
        raise MalformedInput(f"{name}: values must be non-negative")
    return [RPQTask(i, body[3*i], body[3*i + 1], body[3*i + 2]) for i in range(n)]


def rpq_cmax(tasks: Sequence[RPQTask]) -> int:
    """Time the last task is delivered when run in the given order."""
    t = 0
    cmax = 0
    for task in tasks:
        t = max(t, task.r) + task.p
        cmax = max(cmax, t + task.q)
    return cmax


def schrage(tasks: Sequence[RPQTask]) -> Tuple[List[RPQTask], int]:
    """Among released tasks run the one with the largest q (ties -> smaller index)."""
    pending = sorted(tasks, key=lambda t: (t.r, t.index))
    ready: List[RPQTask] = []
    order: List[RPQTask] = []
    t = 0
    while ready or pending:
        while pending and pending[0].r <= t:
            ready.append(pending.pop(0))
        if not ready:
            t = pending[0].r
            continue
        task = min(ready, key=lambda x: (-x.q, x.index))
        ready.remove(task)
        t += task.p
        order.append(task)
    return order, rpq_cmax(order)


def schrage_heap(tasks: Sequence[RPQTask]) -> Tuple[List[RPQTask], int]:
    """:func:`schrage` with heaps for the pending and ready sets, O(n log n)."""
    pending = [(t.r, t.index, t) for t in tasks]
    heapq.heapify(pending)
    ready: List[Tuple[int, int, RPQTask]] = []
    order: List[RPQTask] = []
    t = 0
    while ready or pending:
        while pending and pending[0][0] <= t:
            _, _, task = heapq.heappop(pending)
            heapq.heappush(ready, (-task.q, task.index, task))
        if not ready:
            t = pending[0][0]
            continue
        _, _, task = heapq.heappop(ready)
        t += task.p
        order.append(task)
    return order, rpq_cmax(order)
