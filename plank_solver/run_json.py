# plank_solver/run_json.py
# Runner for project job JSON (planks / cuts / settings) with optimizer mode switch.
#
# Modes:
#   --mode anneal : simulated annealing over cut order + rotation (default)
#   --mode greedy : one area-descending bottom-left pass (fast baseline)
#
# Usage:
#   python -m plank_solver --job bookcase.json
#   python -m plank_solver --job bookcase.json --mode greedy
#   python -m plank_solver --job bookcase.json --seed 7 --iterations 500 --out out/ --png plan.png
#
# Command line options override the job's "settings".

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from .cli import add_search_args, config_from_args, exit_on_bad_input, run_and_report
from .debug import print_result
from .io_json import load_job_json
from .logger import set_enabled


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run the plank cutting optimizer from a job JSON.")
    p.add_argument("--job", type=str, required=True, help="Path to job JSON (planks/cuts/settings)")
    add_search_args(p)
    return p


def main(argv: Optional[list[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)

    job_path = Path(args.job)
    if not job_path.exists():
        raise SystemExit(f"Job JSON not found: {job_path}")

    try:
        loaded = load_job_json(job_path)
        config = config_from_args(args, base=loaded.config)
    except ValueError as e:
        exit_on_bad_input(ValueError(f"{job_path}: {e}"))

    run = run_and_report(loaded.stock, loaded.demand, config, args)
    unit = args.unit or loaded.unit

    print(f"Job: {loaded.name}")
    print(f"Mode: {run.mode}  ({run.seconds:.2f} s)")
    print(f"Kerf: {config.kerf_thickness} {unit}  Tolerance: {config.position_tolerance}")
    print_result(run.result, unit=unit)


if __name__ == "__main__":
    main()
