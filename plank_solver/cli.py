# plank_solver/cli.py
# Command line for project CSV files:
# - reads planks + cuts from one project CSV (or the built-in example)
# - runs annealing (or the greedy baseline)
# - prints cutting instructions + totals
# - optional CSV/JSON export folder, PNG cutting diagram or matplotlib window
#
# Run:
#   python -m plank_solver.cli --project bookcase.csv --seed 42 --out out/
#   python -m plank_solver.cli --example --png plan.png
#   python -m plank_solver.cli --project cuts.csv --plank 2400x300x18*4 --show
#
# CSV format (header required):
#   Type,ID,Length,Width,Thickness,Material,Quantity,Label

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, NoReturn, Optional

from .config import DEFAULTS, UNITS, SAConfig, parse_dims_text
from .debug import print_result
from .io_csv import read_project_csv
from .logger import get_logger, set_enabled
from .plotting import PlotStyle, show_result
from .run import MODES, RunResult, run_optimizer
from .sample_data import example_demand, example_stock
from .types import StockPiece
from .validate import InvalidInputError


def add_search_args(p: argparse.ArgumentParser) -> None:
    """Options shared by all runners. Unset options keep the job/default value."""
    p.add_argument("--mode", type=str, default="anneal", choices=list(MODES), help="Optimizer mode")
    p.add_argument("--kerf", type=float, default=None, help=f"Saw kerf (default {DEFAULTS.default_kerf})")
    p.add_argument("--tolerance", type=float, default=None, help="Position tolerance epsilon")
    p.add_argument("--iterations", type=int, default=None, help="Annealing iterations per restart")
    p.add_argument("--restarts", type=int, default=None, help="Extra random restarts")
    p.add_argument("--neighbors", type=int, default=None, help="Neighbors proposed per iteration")
    p.add_argument("--t_start", type=float, default=None, help="Start temperature")
    p.add_argument("--t_end", type=float, default=None, help="End temperature")
    p.add_argument("--seed", type=int, default=None, help="Random seed (omit for a time-derived seed)")
    p.add_argument("--workers", type=int, default=None, help="Threads for independent restarts")
    p.add_argument("--time", type=float, default=None, help="Wall-clock limit for the search (seconds)")

    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="result", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save cutting diagram as PNG (optional)")
    p.add_argument("--no_labels", action="store_true", help="Hide cut labels in plot")
    p.add_argument("--no_dims", action="store_true", help="Hide cut dimensions in plot")
    p.add_argument("--grid", action="store_true", help="Show grid in plot")
    p.add_argument("--show", action="store_true", help="Show the cutting diagram in a matplotlib window")
    p.add_argument("--unit", type=str, default=None, choices=list(UNITS), help="Length unit shown in the report (default mm)")
    p.add_argument("--quiet", action="store_true", help="Do not log search progress")


def config_from_args(args: argparse.Namespace, base: Optional[SAConfig] = None) -> SAConfig:
    overrides = {
        "kerf_thickness": args.kerf,
        "position_tolerance": args.tolerance,
        "iterations": args.iterations,
        "random_restarts": args.restarts,
        "neighbors_per_iteration": args.neighbors,
        "start_temperature": args.t_start,
        "end_temperature": args.t_end,
        "seed": args.seed,
        "workers": args.workers,
        "time_limit_s": args.time,
    }
    return replace(base or SAConfig(), **{k: v for k, v in overrides.items() if v is not None})


def style_from_args(args: argparse.Namespace) -> PlotStyle:
    return PlotStyle(
        show_labels=not args.no_labels,
        show_dims=not args.no_dims,
        show_grid=bool(args.grid),
    )


def plank_from_text(plank_id: str, text: str) -> StockPiece:
    """'2400x300x18' or '2400x300x18*4' (length x width x thickness, optional quantity)."""
    dims, _, qty = text.partition("*")
    length, width, thickness = parse_dims_text(dims)
    try:
        quantity = int(qty) if qty.strip() else 1
    except ValueError as e:
        raise ValueError(f"Bad plank quantity in {text!r}") from e
    return StockPiece(plank_id, length, width, thickness, quantity=quantity)


def exit_on_bad_input(e: Exception) -> NoReturn:
    """Report unusable input (files, options, pieces) and exit with status 2."""
    get_logger().error(str(e))
    raise SystemExit(2) from e


def run_and_report(stock, demand, config: SAConfig, args: argparse.Namespace) -> RunResult:
    """Shared tail of both runners: optimize, export, optionally show the diagram."""
    try:
        run = run_optimizer(
            stock,
            demand,
            config,
            mode=args.mode,
            out_dir=args.out.strip() or None,
            export_prefix=args.prefix,
            png=args.png.strip() or None,
            plot_style=style_from_args(args),
        )
    except InvalidInputError as e:
        exit_on_bad_input(e)

    if args.show and run.result.optimized_planks:
        show_result(run.result, style=style_from_args(args))
    return run


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Plank cutting optimizer (simulated annealing + bottom-left fill)")
    p.add_argument("--project", type=str, default="", help="Path to project CSV (planks + cuts)")
    p.add_argument("--example", action="store_true", help="Use built-in example planks and cuts")
    p.add_argument(
        "--plank",
        type=str,
        action="append",
        default=[],
        help="Extra stock plank LxWxT or LxWxT*qty, e.g. 2400x300x18*4 (repeatable)",
    )
    add_search_args(p)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)

    if not args.example and not args.project:
        raise SystemExit("Provide --project project.csv or use --example")

    try:
        if args.example:
            stock, demand = example_stock(), example_demand()
        else:
            stock, demand = read_project_csv(Path(args.project))
        for k, text in enumerate(args.plank, start=1):
            stock.append(plank_from_text(f"extra_{k}", text))
        config = config_from_args(args)
    except ValueError as e:
        exit_on_bad_input(e)
    if not demand:
        raise SystemExit("No cuts found in project.")

    run = run_and_report(stock, demand, config, args)

    print(f"Mode: {run.mode}  ({run.seconds:.2f} s)")
    print_result(run.result, unit=args.unit or DEFAULTS.default_unit)


if __name__ == "__main__":
    main()
