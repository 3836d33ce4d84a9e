"""Run configuration for the benchmark scripts.

A YAML file may provide any :class:`RunConfig` field; command-line flags
override the file values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .algorithms import get_algorithm
from .exact import MAX_EXACT_JOBS


@dataclass(frozen=True)
class RunConfig:
    instances: str = "data"
    algorithms: Tuple[str, ...] = ("bnb", "brute", "fneh", "johnson", "neh")
    repeats: int = 1
    max_exact_jobs: int = MAX_EXACT_JOBS
    bnb_initial: Optional[str] = "neh"
    exact_fallback: Optional[str] = None
    outdir: str = "results"
    best_known: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.repeats < 1:
            raise ValueError("repeats must be >= 1")
        if self.max_exact_jobs < 0:
            raise ValueError("max_exact_jobs must be >= 0")
        for key in self.algorithms:
            get_algorithm(key)
        if self.exact_fallback is not None:
            get_algorithm(self.exact_fallback)
        if self.bnb_initial not in (None, "neh"):
            raise ValueError(f"bnb_initial must be 'neh' or null, got {self.bnb_initial!r}")

    def solver_options(self) -> Dict[str, object]:
        return {"max_jobs": self.max_exact_jobs, "initial": self.bnb_initial}


def _normalise(raw: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(raw)
    if isinstance(out.get("algorithms"), str):
        out["algorithms"] = [a.strip() for a in out["algorithms"].split(",") if a.strip()]
    if "algorithms" in out:
        out["algorithms"] = tuple(out["algorithms"])
    if out.get("bnb_initial") in ("none", "None", ""):
        out["bnb_initial"] = None
    return out


def load_config(path: str | Path) -> RunConfig:
    """Read a YAML mapping of :class:`RunConfig` fields."""
    text = Path(path).read_text(encoding="utf-8")
    raw = yaml.safe_load(text) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level of the config must be a mapping")
    known = {f.name for f in fields(RunConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"{path}: unknown config keys: {', '.join(unknown)}")
    return RunConfig(**_normalise(raw))


def override(config: RunConfig, **values: Any) -> RunConfig:
    """Return ``config`` with every non-None value in ``values`` applied."""
    given = {k: v for k, v in values.items() if v is not None}
    return replace(config, **_normalise(given))


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
