# scripts/run_experiments.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# make src importable
THIS_FILE = Path(__file__).resolve()
ROOT = THIS_FILE.parents[1]
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from flowshop.algorithms import available_algorithms, describe_algorithm
from flowshop.config import RunConfig, load_config, override, setup_logging
from flowshop.instance import attach_best_known, load_best_known, read_instances
from flowshop.reporting import format_table, pivot_makespan, summarise_by_instance
from flowshop.runner import run_benchmark

logger = logging.getLogger("flowshop.scripts.run_experiments")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run flow-shop algorithms on a directory of instances")
    p.add_argument("--config", type=str, default=None, help="YAML file with RunConfig fields")
    # data
    p.add_argument("--instances", type=str, default=None, help="Directory of .txt instances or a single file")
    p.add_argument("--best-known", type=str, default=None, help="CSV with columns instance,best_makespan")
    p.add_argument("--list-algorithms", action="store_true")
    # algorithms + runtime
    p.add_argument("--algorithms", type=str, default=None, help="Comma-separated algorithm keys")
    p.add_argument("--repeats", type=int, default=None)
    p.add_argument("--max-exact-jobs", type=int, default=None)
    p.add_argument("--bnb-initial", type=str, default=None, choices=["neh", "none"])
    p.add_argument("--exact-fallback", type=str, default=None, help="Algorithm to run when an exact method refuses")
    p.add_argument("--outdir", type=str, default=None)
    p.add_argument("--log-level", type=str, default=None)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_algorithms:
        for key in available_algorithms():
            print(describe_algorithm(key))
            print()
        return 0

    cfg = load_config(args.config) if args.config else RunConfig()
    cfg = override(
        cfg,
        instances=args.instances,
        best_known=args.best_known,
        algorithms=args.algorithms,
        repeats=args.repeats,
        max_exact_jobs=args.max_exact_jobs,
        bnb_initial=args.bnb_initial,
        exact_fallback=args.exact_fallback,
        outdir=args.outdir,
        log_level=args.log_level,
    )
    setup_logging(cfg.log_level)

    insts = read_instances(cfg.instances)
    if not insts:
        logger.error("No instances found in %s", cfg.instances)
        return 1
    if cfg.best_known:
        attach_best_known(insts, load_best_known(cfg.best_known))

    outdir = Path(cfg.outdir); outdir.mkdir(parents=True, exist_ok=True)
    df = run_benchmark(
        insts,
        algorithms=cfg.algorithms,
        repeats=cfg.repeats,
        exact_fallback=cfg.exact_fallback,
        solver_options=cfg.solver_options(),
    )
    df.to_csv(outdir / "raw.csv", index=False)
    summarise_by_instance(df).to_csv(outdir / "summary_by_instance.csv", index=False)
    pivot_makespan(df).to_csv(outdir / "makespan_by_algorithm.csv", index=False)

    meta = {
        "config": {k: (list(v) if isinstance(v, tuple) else v) for k, v in vars(cfg).items()},
        "n_instances": len(insts),
    }
    with open(outdir / "meta.json", "w") as f:
        json.dump(meta, f, indent=2)

    print(format_table(df))
    print(f"Wrote results for {len(insts)} instances to {outdir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
