# scripts/compare_algorithms.py
from __future__ import annotations
import argparse
import sys
from pathlib import Path
import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flowshop.instance import load_best_known
from flowshop.reporting import add_rpd_column, pivot_makespan


def compare(raw_csv_path: str, bks_path: str | None = None) -> pd.DataFrame:
    df = pd.read_csv(raw_csv_path)
    pt = pivot_makespan(df)
    # gap of each heuristic to the exact optimum, where one was computed
    exact = [c for c in ("bnb", "brute") if c in pt.columns]
    if exact:
        optimum = pt[exact].min(axis=1)
        for col in ("neh", "fneh", "johnson"):
            if col in pt.columns:
                pt[f"gap_{col}"] = pt[col] - optimum
    if bks_path:
        best = load_best_known(bks_path)
        rpd = add_rpd_column(df, best).groupby("algorithm")["rpd"].mean()
        print("Mean RPD per algorithm:")
        print(rpd.to_string())
    return pt


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Pivot raw benchmark results to instance x algorithm")
    ap.add_argument("--raw", required=True)
    ap.add_argument("--bks-file", default=None, help="CSV with columns 'instance' and 'best_makespan'")
    ap.add_argument("--out", default="comparison.csv")
    args = ap.parse_args()
    comp = compare(args.raw, args.bks_file)
    comp.to_csv(args.out, index=False)
    print("Saved", args.out)
