# plank_solver/optimizer.py
# Public entry points:
#   optimize(stock, demand, config)        -> simulated annealing over cut sequences
#   optimize_greedy(stock, demand, config) -> single area-descending greedy pass
#
# Stateless: every call expands its own unit copies from the (immutable) inputs,
# so concurrent calls never share mutable state.

from __future__ import annotations

from typing import Optional, Sequence

from .annealing import CancelToken, fitness, search
from .config import SAConfig, resolve_seed
from .logger import get_logger
from .metrics import aggregate
from .packer import order_by_area, pack
from .types import DemandPiece, OptimizationResult, StockPiece, expand_demand, expand_stock
from .validate import raise_on_invalid_input, validate_inputs


def optimize(
    stock: Sequence[StockPiece],
    demand: Sequence[DemandPiece],
    config: Optional[SAConfig] = None,
    *,
    cancel: Optional[CancelToken] = None,
) -> OptimizationResult:
    """
    Assign every demanded cut to a plank position (or report it unplaced),
    minimizing unplaced cuts first and waste area second.

    Raises InvalidInputError before any work if a dimension or quantity is
    not positive. Unplaceable cuts and empty stock are reported in the result.
    With an explicit config.seed (and no deadline/cancel) the result is reproducible.
    """
    config = config or SAConfig()
    raise_on_invalid_input(validate_inputs(stock, demand))

    seed = resolve_seed(config)
    stock_units = expand_stock(stock)
    cuts = expand_demand(demand)

    log = get_logger()
    log.info(
        f"optimize: {len(cuts)} cut(s) on {len(stock_units)} plank(s), seed={seed}, "
        f"iterations={config.iterations}, restarts={config.random_restarts + 1}"
    )

    outcome = search(stock_units, cuts, config, seed, cancel=cancel)
    if outcome.stopped_early:
        log.warn("search stopped early (cancelled or time limit); returning best packing so far")

    best = outcome.best
    return aggregate(
        best.pack.bins,
        best.pack.unplaced,
        stock,
        fitness=best.fitness,
        seed=seed,
        restarts=[r.best.fitness for r in outcome.restarts],
    )


def optimize_greedy(
    stock: Sequence[StockPiece],
    demand: Sequence[DemandPiece],
    config: Optional[SAConfig] = None,
) -> OptimizationResult:
    """
    One deterministic packing pass: largest cuts first, unrotated preference.
    Fast baseline; uses only kerf/tolerance from the config.
    """
    config = config or SAConfig()
    raise_on_invalid_input(validate_inputs(stock, demand))

    cuts = order_by_area(expand_demand(demand))
    result = pack(
        expand_stock(stock),
        cuts,
        kerf=config.kerf_thickness,
        tolerance=config.position_tolerance,
    )
    score = fitness(result, config.unplaced_penalty)
    return aggregate(result.bins, result.unplaced, stock, fitness=score)
