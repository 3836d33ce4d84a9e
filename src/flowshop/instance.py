# src/flowshop/instance.py
from __future__ import annotations
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import numpy as np
import pandas as pd

from .errors import DimensionMismatch, MalformedInput

PathLike = Union[str, Path]


@dataclass(eq=False)
class Instance:
    """Permutation flow-shop job set.

    ``p_times[machine, job]`` holds the processing time of ``job`` on
    ``machine``; the array is made read-only on construction so solvers can
    share it without copying.
    """

    name: str
    p_times: np.ndarray  # shape: (machines, jobs)
    best_makespan: Optional[int] = None

    def __post_init__(self) -> None:
        raw = np.asarray(self.p_times)
        if raw.dtype.kind == "f" and not (np.isfinite(raw) & (raw == np.floor(raw))).all():
            raise MalformedInput(f"non-integer processing time in instance '{self.name}'")
        arr = raw.astype(np.int64)
        if arr.ndim != 2:
            raise DimensionMismatch(f"p_times must be 2-D (machines, jobs), got shape {arr.shape}")
        if arr.shape[0] < 1:
            raise DimensionMismatch("an instance needs at least one machine")
        if (arr < 0).any():
            raise MalformedInput(f"negative processing time in instance '{self.name}'")
        arr.setflags(write=False)
        self.p_times = arr

    @property
    def m(self) -> int: return self.p_times.shape[0]
    @property
    def n(self) -> int: return self.p_times.shape[1]

    @cached_property
    def times(self) -> Tuple[Tuple[int, ...], ...]:
        """Job-major processing times as plain ints: ``times[job][machine]``."""
        return tuple(tuple(int(v) for v in col) for col in self.p_times.T)

    def job(self, index: int) -> Tuple[int, ...]:
        return self.times[index]

    @classmethod
    def from_jobs(
        cls,
        jobs: Sequence[Sequence[int]],
        name: str = "instance",
        machines: Optional[int] = None,
    ) -> "Instance":
        """Build an instance from job rows (one row of m times per job)."""
        rows = [list(row) for row in jobs]
        if not rows:
            if machines is None:
                raise DimensionMismatch("machine count is required for an empty job set")
            return cls(name=name, p_times=np.zeros((machines, 0), dtype=np.int64))
        m = len(rows[0]) if machines is None else machines
        for idx, row in enumerate(rows):
            if len(row) != m:
                raise DimensionMismatch(f"job {idx} has {len(row)} processing times, expected {m}")
        return cls(name=name, p_times=np.array(rows).T)


def as_instance(jobs: Union[Instance, Sequence[Sequence[int]]]) -> Instance:
    """Accept an :class:`Instance` or nested job rows."""
    if isinstance(jobs, Instance):
        return jobs
    return Instance.from_jobs(jobs, machines=None if len(jobs) else 1)


def read_ints(text: str, source: str) -> List[int]:
    tokens = text.split()
    try:
        return [int(tok) for tok in tokens]
    except ValueError as exc:
        raise MalformedInput(f"{source}: non-integer token ({exc})") from None


def parse_instance(text: str, name: str = "instance") -> Instance:
    """Parse ``n m`` followed by ``n*m`` processing times, row-major by job."""
    values = read_ints(text, name)
    if len(values) < 2:
        raise MalformedInput(f"{name}: expected header 'n m', got {len(values)} integers")
    n, m = values[0], values[1]
    if n < 0 or m < 1:
        raise MalformedInput(f"{name}: invalid header n={n}, m={m}")
    body = values[2:]
    if len(body) != n * m:
        raise MalformedInput(f"{name}: expected {n * m} processing times, got {len(body)}")
    if any(v < 0 for v in body):
        raise MalformedInput(f"{name}: processing times must be non-negative")
    p_times = np.array(body, dtype=np.int64).reshape(n, m).T
    return Instance(name=name, p_times=p_times)


def read_text_instance(path: PathLike) -> Instance:
    p = Path(path)
    return parse_instance(p.read_text(encoding="utf-8"), name=p.stem)


def read_instances(source: Union[PathLike, Iterable[PathLike]], pattern: str = "*.txt") -> Dict[str, Instance]:
    """Load every instance file in a directory (or an explicit list of files)."""
    if isinstance(source, (str, Path)) and Path(source).is_dir():
        paths = sorted(Path(source).glob(pattern))
    elif isinstance(source, (str, Path)):
        paths = [Path(source)]
    else:
        paths = sorted(Path(p) for p in source)
    out: Dict[str, Instance] = {}
    for path in paths:
        inst = read_text_instance(path)
        out[inst.name] = inst
    return out


def read_workbook(xlsx_path: PathLike, verbose: bool = False) -> Dict[str, Instance]:
    # Force engine to openpyxl to avoid hangs/ambiguous detection
    xl = pd.ExcelFile(xlsx_path, engine="openpyxl")
    out: Dict[str, Instance] = {}
    total = len(xl.sheet_names)
    for idx, sheet in enumerate(xl.sheet_names, start=1):
        if verbose:
            print(f"[read] {idx}/{total} {sheet}")
        df = xl.parse(sheet, header=None)
        header = [x for x in df.iloc[0].tolist() if pd.notna(x)]
        if len(header) < 2:
            raise MalformedInput(f"Sheet '{sheet}' must start with integer header [n, m]. Got: {header}")
        n = int(header[0]); m = int(header[1])
        rows = [[int(x) for x in row.tolist() if pd.notna(x)] for _, row in df.iloc[1:1+n].iterrows()]
        if len(rows) != n or any(len(r) != m for r in rows):
            raise MalformedInput(f"Sheet '{sheet}' must hold {n} job rows of {m} integers")
        out[str(sheet)] = Instance.from_jobs(rows, name=str(sheet), machines=m)
    return out


def write_workbook(instances: Mapping[str, Instance], xlsx_path: PathLike) -> None:
    # xlsxwriter produces a proper .xlsx zip file
    with pd.ExcelWriter(xlsx_path, engine="xlsxwriter") as writer:
        for name, inst in instances.items():
            header = pd.DataFrame([[inst.n, inst.m]])
            body = pd.DataFrame(inst.p_times.T.tolist())
            df = pd.concat([header, body], ignore_index=True)
            # Excel sheet names cannot exceed 31 characters
            df.to_excel(writer, sheet_name=name[:31], header=False, index=False)


def load_best_known(csv_path: PathLike) -> Dict[str, int]:
    df = pd.read_csv(csv_path)
    if not {"instance", "best_makespan"} <= set(df.columns):
        raise ValueError("best_known.csv must have columns: instance,best_makespan")
    return (
        df[["instance", "best_makespan"]]
        .dropna()
        .set_index("instance")["best_makespan"]
        .astype(int)
        .to_dict()
    )


def attach_best_known(instances: Dict[str, Instance], best_known: Mapping[str, int]) -> None:
    for name, val in best_known.items():
        if name in instances:
            instances[name].best_makespan = int(val)
