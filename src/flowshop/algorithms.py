# src/flowshop/algorithms.py
"""Registry of flow-shop algorithms sharing the ``(instance) -> ScheduleResult`` contract.

The runner and the scripts iterate over :data:`ALGORITHMS` instead of
dispatching on names inside the solvers.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Sequence

from .exact import MAX_EXACT_JOBS, branch_and_bound, brute_force
from .instance import Instance
from .johnson import johnson
from .models import ScheduleResult
from .neh import fast_neh, neh

Solver = Callable[..., ScheduleResult]

EXACT = "exact"
HEURISTIC = "heuristic"
CLOSED_FORM = "closed-form"


@dataclass(frozen=True)
class AlgorithmSpec:
    key: str
    identifier: str
    kind: str
    description: str
    solve: Solver
    parameters: Mapping[str, str] = field(default_factory=dict)

    def run(self, instance: Instance, **options: object) -> ScheduleResult:
        """Run the solver, forwarding only the options it declares."""
        accepted = {k: v for k, v in options.items() if k in self.parameters}
        return self.solve(instance, **accepted)


ALGORITHMS: Dict[str, AlgorithmSpec] = {
    "bnb": AlgorithmSpec(
        key="bnb",
        identifier="Branch and bound",
        kind=EXACT,
        description="Depth-first search over partial permutations pruned by the machine-based lower bound.",
        solve=branch_and_bound,
        parameters={
            "max_jobs": f"Job-count ceiling (default {MAX_EXACT_JOBS}).",
            "initial": "'neh' seeds the incumbent with fast NEH; None starts from infinity.",
        },
    ),
    "brute": AlgorithmSpec(
        key="brute",
        identifier="Brute force",
        kind=EXACT,
        description="Lexicographic enumeration of all n! permutations; first minimum wins.",
        solve=brute_force,
        parameters={"max_jobs": f"Job-count ceiling (default {MAX_EXACT_JOBS})."},
    ),
    "fneh": AlgorithmSpec(
        key="fneh",
        identifier="Fast NEH",
        kind=HEURISTIC,
        description="NEH insertion evaluated with head/tail matrices in O(k*m) per insertion.",
        solve=fast_neh,
    ),
    "johnson": AlgorithmSpec(
        key="johnson",
        identifier="Johnson's rule",
        kind=CLOSED_FORM,
        description="Optimal two-machine ordering; other machine counts raise WrongMachineCount.",
        solve=johnson,
    ),
    "neh": AlgorithmSpec(
        key="neh",
        identifier="NEH",
        kind=HEURISTIC,
        description="Insert jobs by descending total time at the position with the smallest full makespan.",
        solve=neh,
    ),
}


def available_algorithms() -> Dict[str, str]:
    """Return mapping of algorithm key to display identifier."""
    return {key: spec.identifier for key, spec in ALGORITHMS.items()}


def get_algorithm(key: str) -> AlgorithmSpec:
    k = key.lower()
    if k not in ALGORITHMS:
        raise KeyError(f"Unknown algorithm '{key}'. Available: {', '.join(sorted(ALGORITHMS))}")
    return ALGORITHMS[k]


def resolve_algorithms(keys: Sequence[str]) -> list[AlgorithmSpec]:
    return [get_algorithm(k) for k in keys]


def describe_algorithm(key: str) -> str:
    a = get_algorithm(key)
    lines = [f"{a.identifier} ({a.key}, {a.kind})", a.description]
    if a.parameters:
        lines.append("Parameters:")
        for k, v in a.parameters.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
