# plank_solver/run.py
# High-level convenience runner that ties together:
# - optimizer (annealing or the greedy baseline)
# - validation of the packing invariants
# - optional CSV + JSON export
# - optional matplotlib cutting diagram
#
# This is meant to be called from your own scripts or the command line runners.
# Example:
#   from plank_solver.run import run_optimizer
#   res = run_optimizer(stock, demand, config, out_dir="out", png="plan.png")

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .annealing import CancelToken
from .config import SAConfig
from .io_csv import export_all
from .logger import get_logger
from .optimizer import optimize, optimize_greedy
from .plotting import PlotStyle, save_result_png
from .types import DemandPiece, OptimizationResult, StockPiece
from .utils import save_result_json, timer
from .validate import ValidationIssue, raise_on_errors, validate_result

MODES = ("anneal", "greedy")


@dataclass(frozen=True)
class RunResult:
    result: OptimizationResult
    mode: str
    seconds: float
    warnings: List[ValidationIssue]


def run_optimizer(
    stock: Sequence[StockPiece],
    demand: Sequence[DemandPiece],
    config: Optional[SAConfig] = None,
    *,
    mode: str = "anneal",
    validate: bool = True,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "result",
    png: Optional[str | Path] = None,
    plot_style: Optional[PlotStyle] = None,
    cancel: Optional[CancelToken] = None,
) -> RunResult:
    """
    Run the optimizer end-to-end. Raises InvalidInputError on bad input and
    ValueError if the packing breaks an invariant (solver bug).
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
    config = config or SAConfig()
    log = get_logger()

    with timer(mode) as t:
        if mode == "anneal":
            res = optimize(stock, demand, config, cancel=cancel)
        else:
            res = optimize_greedy(stock, demand, config)

    warnings: List[ValidationIssue] = []
    if validate:
        issues = validate_result(res, demand, config)
        raise_on_errors(issues)
        warnings = [i for i in issues if i.level.upper() == "WARN"]
        for w in warnings:
            log.warn(w.message)

    if out_dir is not None:
        outp = Path(out_dir)
        export_all(res, out_dir=outp, prefix=export_prefix)
        save_result_json(res, outp / f"{export_prefix}.json")
        log.info(f"Exported CSV + JSON to: {outp}")

    if png is not None and res.optimized_planks:
        save_result_png(res, str(png), style=plot_style)
        log.info(f"Cutting diagram saved to: {png}")

    return RunResult(result=res, mode=mode, seconds=t["seconds"], warnings=warnings)
