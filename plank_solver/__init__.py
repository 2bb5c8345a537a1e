# plank_solver/__init__.py
"""
Plank cutting optimizer (2-D cutting stock with saw kerf).

Pieces:
- bottom-left fill packer with kerf clearance and position tolerance
- simulated annealing over cut order + preferred rotation, with restarts
  (optionally on a thread pool) and cooperative cancellation
- per-plank and run-level statistics (efficiency, waste area/length, kerf loss)
- JSON / CSV project I/O, text cutting instructions, matplotlib diagrams

Entry point: optimize(stock, demand, config) -> OptimizationResult
"""

from .types import (
    StockPiece,
    DemandPiece,
    UnitStock,
    UnitCut,
    expand_stock,
    expand_demand,
    Placement,
    BinStats,
    PackedBin,
    OptimizationResult,
)

from .config import (
    DEFAULTS,
    SAConfig,
    make_config,
)

from .metrics import (
    compute_bin_stats,
    aggregate,
    additional_planks_needed,
)

from .packer import (
    PackResult,
    pack,
)

from .optimizer import (
    optimize,
    optimize_greedy,
)

from .validate import (
    InvalidInputError,
    ValidationIssue,
    validate_inputs,
    validate_result,
)

__all__ = [
    # types
    "StockPiece",
    "DemandPiece",
    "UnitStock",
    "UnitCut",
    "expand_stock",
    "expand_demand",
    "Placement",
    "BinStats",
    "PackedBin",
    "OptimizationResult",
    # config
    "DEFAULTS",
    "SAConfig",
    "make_config",
    # metrics
    "compute_bin_stats",
    "aggregate",
    "additional_planks_needed",
    # packer
    "PackResult",
    "pack",
    # optimizer
    "optimize",
    "optimize_greedy",
    # validation
    "InvalidInputError",
    "ValidationIssue",
    "validate_inputs",
    "validate_result",
]
