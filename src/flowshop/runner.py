"""Benchmark runner: every algorithm on every instance, one row per run."""
from __future__ import annotations

import logging
import time
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from .algorithms import EXACT, AlgorithmSpec, get_algorithm, resolve_algorithms
from .errors import FlowShopError, TooManyJobs
from .instance import Instance
from .reporting import add_rpd_column

logger = logging.getLogger(__name__)

COLUMNS = [
    "instance", "n", "m", "algorithm", "run", "makespan", "iterations",
    "elapsed", "status", "permutation", "best_known", "rpd",
]


def _solve(spec: AlgorithmSpec, inst: Instance, options: Mapping[str, object]) -> dict:
    start_time = time.perf_counter()
    result = spec.run(inst, **options)
    elapsed = time.perf_counter() - start_time
    return {
        "makespan": int(result.makespan),
        "iterations": int(result.iterations),
        "elapsed": elapsed,
        "permutation": " ".join(str(j) for j in result.permutation),
    }


def run_benchmark(
    instances: Mapping[str, Instance],
    algorithms: Sequence[str] = ("bnb", "brute", "fneh", "johnson", "neh"),
    repeats: int = 1,
    exact_fallback: Optional[str] = None,
    solver_options: Optional[Mapping[str, object]] = None,
) -> pd.DataFrame:
    """Run ``algorithms`` on each instance ``repeats`` times.

    A :class:`FlowShopError` raised by a solver is recorded in the ``status``
    column with ``makespan`` left empty. When an exact solver raises
    ``TooManyJobs`` and ``exact_fallback`` names another algorithm, that
    algorithm is run instead and the status reads ``fallback:<key>``.
    """
    specs = resolve_algorithms(algorithms)
    fallback = get_algorithm(exact_fallback) if exact_fallback else None
    if fallback is not None and fallback.kind == EXACT:
        raise ValueError(f"Fallback '{fallback.key}' is itself an exact method")
    options: Mapping[str, object] = solver_options or {}
    records: List[dict] = []

    for inst_name, inst in instances.items():
        for spec in specs:
            for run_idx in range(repeats):
                logger.info("[%s] %s (n=%d, m=%d) run %d/%d", spec.key, inst_name, inst.n, inst.m, run_idx + 1, repeats)
                row: Dict[str, object] = {
                    "instance": inst_name,
                    "n": inst.n,
                    "m": inst.m,
                    "algorithm": spec.key,
                    "run": run_idx,
                    "makespan": None,
                    "iterations": None,
                    "elapsed": None,
                    "status": "ok",
                    "permutation": None,
                    "best_known": inst.best_makespan,
                }
                try:
                    row.update(_solve(spec, inst, options))
                except TooManyJobs as exc:
                    logger.warning("[%s] %s: %s", spec.key, inst_name, exc)
                    row["status"] = type(exc).__name__
                    if fallback is not None and spec.kind == EXACT:
                        try:
                            row.update(_solve(fallback, inst, options))
                            row["status"] = f"fallback:{fallback.key}"
                        except FlowShopError as fb_exc:
                            logger.warning("[%s] %s fallback %s: %s", spec.key, inst_name, fallback.key, fb_exc)
                            row["status"] = type(fb_exc).__name__
                except FlowShopError as exc:
                    logger.warning("[%s] %s: %s", spec.key, inst_name, exc)
                    row["status"] = type(exc).__name__
                records.append(row)

    df = pd.DataFrame.from_records(records, columns=[c for c in COLUMNS if c != "rpd"])
    for col in ("makespan", "iterations", "best_known"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")
    df["elapsed"] = pd.to_numeric(df["elapsed"], errors="coerce")
    return add_rpd_column(df)
