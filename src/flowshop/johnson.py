# src/flowshop/johnson.py
"""Johnson's rule: optimal job order for the two-machine flow shop.

Tie rule: a job whose first-machine time is not larger than its
second-machine time belongs to the front group (equal times go to the
front). The front group runs in ascending ``(p1, index)`` order, the back
group in descending ``(p2, index)`` order. This is the order produced by
repeatedly taking the globally smallest remaining time, lowest job index
first.

A bare empty job list carries no machine count and is read as an empty
two-machine instance, giving an empty order with Cmax 0. An empty
:class:`Instance` with another machine count still raises
``WrongMachineCount``.
"""
from __future__ import annotations
from typing import Sequence, Union

from .errors import WrongMachineCount
from .evaluation import evaluate_cmax
from .instance import Instance, as_instance
from .models import ScheduleResult


def johnson(jobs: Union[Instance, Sequence[Sequence[int]]]) -> ScheduleResult:
    if not isinstance(jobs, Instance) and len(jobs) == 0:
        inst = Instance.from_jobs([], machines=2)
    else:
        inst = as_instance(jobs)
    if inst.m != 2:
        raise WrongMachineCount(f"Johnson's rule needs exactly 2 machines, instance has {inst.m}")
    times = inst.times
    front = sorted((j for j in range(inst.n) if times[j][0] <= times[j][1]), key=lambda j: (times[j][0], j))
    back = sorted((j for j in range(inst.n) if times[j][0] > times[j][1]), key=lambda j: (times[j][1], j), reverse=True)
    perm = front + back
    return ScheduleResult(permutation=perm, makespan=evaluate_cmax(inst, perm), iterations=inst.n)
