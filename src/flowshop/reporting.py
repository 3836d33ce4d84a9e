"""Reporting helpers: RPD, per-instance summaries and text tables."""

from __future__ import annotations

from typing import Mapping

import pandas as pd


def add_rpd_column(df: pd.DataFrame, best_known: Mapping[str, int] | None = None) -> pd.DataFrame:
    """Return a copy of *df* with a relative percent deviation ``rpd`` column.

    Parameters
    ----------
    df:
        DataFrame with at least ``instance`` and ``makespan`` columns.
    best_known:
        Optional mapping from instance name to best known makespan.  When
        provided, the ``best_known`` column is filled/overwritten with the
        mapped values before computing the RPD.
    """

    if "instance" not in df.columns:
        raise ValueError("Input DataFrame must contain an 'instance' column")
    if "makespan" not in df.columns:
        raise ValueError("Input DataFrame must contain a 'makespan' column")

    result = df.copy()
    if best_known is not None:
        result["best_known"] = result["instance"].map(best_known)
    if "best_known" not in result.columns:
        result["best_known"] = pd.NA
    known = pd.to_numeric(result["best_known"], errors="coerce").astype(float)
    value = pd.to_numeric(result["makespan"], errors="coerce").astype(float)
    result["rpd"] = float("nan")
    mask = known.notna() & value.notna() & (known > 0)
    result.loc[mask, "rpd"] = (value[mask] - known[mask]) / known[mask] * 100.0
    return result


def summarise_by_instance(df: pd.DataFrame) -> pd.DataFrame:
    """Compute summary statistics grouped by algorithm and instance."""

    required = {"algorithm", "instance", "makespan", "elapsed"}
    missing = required.difference(df.columns)
    if missing:
        raise ValueError(f"DataFrame missing required columns: {', '.join(sorted(missing))}")
    data = df.copy()
    data["makespan"] = pd.to_numeric(data["makespan"], errors="coerce").astype(float)
    data["elapsed"] = pd.to_numeric(data["elapsed"], errors="coerce").astype(float)
    agg_dict: dict[str, object] = {
        "makespan": ["mean", "min"],
        "elapsed": "mean",
    }
    if "iterations" in data.columns:
        data["iterations"] = pd.to_numeric(data["iterations"], errors="coerce").astype(float)
        agg_dict["iterations"] = "mean"
    if "rpd" in data.columns:
        agg_dict["rpd"] = "mean"
    grouped = data.groupby(["algorithm", "instance"], as_index=False).agg(agg_dict)
    # Flatten MultiIndex columns produced by aggregation
    grouped.columns = [
        "_".join(filter(None, map(str, col))).rstrip("_") for col in grouped.columns.values
    ]
    return grouped


def pivot_makespan(df: pd.DataFrame) -> pd.DataFrame:
    """Best makespan per instance (rows) and algorithm (columns)."""
    data = df.assign(makespan=pd.to_numeric(df["makespan"], errors="coerce").astype(float))
    pt = data.pivot_table(index="instance", columns="algorithm", values="makespan", aggfunc="min")
    pt.columns.name = None
    return pt.reset_index()


def format_table(df: pd.DataFrame) -> str:
    """Fixed-width table of instance, algorithm, Cmax and time in microseconds."""
    lines = [f"{'Test file':<25}{'Algorithm':<12}{'Cmax':<10}{'Time [us]':<12}", "-" * 59]
    for row in df.itertuples(index=False):
        failed = pd.isna(row.makespan)
        cmax = "N/A" if failed else str(int(row.makespan))
        time_us = "N/A" if failed or pd.isna(row.elapsed) else str(int(round(row.elapsed * 1e6)))
        lines.append(f"{str(row.instance):<25}{str(row.algorithm):<12}{cmax:<10}{time_us:<12}")
    return "\n".join(lines)
