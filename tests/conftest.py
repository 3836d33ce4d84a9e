"""Pytest configuration: src layout on sys.path, shared instances, summary hook."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
for _path in (_root, _src):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from flowshop.instance import Instance  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def random_instance(rng: np.random.Generator, n: int, m: int, high: int = 20) -> Instance:
    """Random instance with processing times in [1, high]."""
    return Instance(name=f"rand_{n}x{m}", p_times=rng.integers(1, high + 1, size=(m, n)))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def three_jobs() -> Instance:
    return Instance.from_jobs([[2, 3], [4, 1], [3, 5]], name="three_jobs")


@pytest.fixture
def empty_two_machines() -> Instance:
    return Instance.from_jobs([], name="empty", machines=2)


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Passed: {passed} | Failed: {failed} | Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
