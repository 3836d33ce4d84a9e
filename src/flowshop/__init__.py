"""Permutation flow-shop makespan optimisation package.

This package contains modules for reading flow-shop instances, evaluating
makespans, the exact solvers (brute force, branch and bound), Johnson's
rule, the NEH heuristics and the benchmark runner/reporting helpers.
"""

from .algorithms import ALGORITHMS, AlgorithmSpec, available_algorithms, describe_algorithm, get_algorithm
from .errors import (
    DimensionMismatch,
    FlowShopError,
    InvalidPermutation,
    MalformedInput,
    TooManyJobs,
    WrongMachineCount,
)
from .evaluation import completion_matrix, evaluate_cmax, makespan
from .exact import MAX_EXACT_JOBS, branch_and_bound, brute_force, prefix_lower_bound
from .instance import Instance, parse_instance, read_instances, read_text_instance
from .johnson import johnson
from .models import InsertionStep, ScheduleResult
from .neh import fast_neh, insertion_trace, neh
from .reporting import add_rpd_column, format_table, pivot_makespan, summarise_by_instance
from .runner import run_benchmark

__all__ = [
    "ALGORITHMS",
    "AlgorithmSpec",
    "available_algorithms",
    "describe_algorithm",
    "get_algorithm",
    "FlowShopError",
    "DimensionMismatch",
    "InvalidPermutation",
    "MalformedInput",
    "TooManyJobs",
    "WrongMachineCount",
    "Instance",
    "parse_instance",
    "read_instances",
    "read_text_instance",
    "completion_matrix",
    "evaluate_cmax",
    "makespan",
    "MAX_EXACT_JOBS",
    "brute_force",
    "branch_and_bound",
    "prefix_lower_bound",
    "johnson",
    "neh",
    "fast_neh",
    "insertion_trace",
    "InsertionStep",
    "ScheduleResult",
    "run_benchmark",
    "add_rpd_column",
    "summarise_by_instance",
    "pivot_makespan",
    "format_table",
]
