# plank_solver/metrics.py
# Metrics for plank cutting:
# - per-plank stats (used area, kerf loss, waste area, linear waste, efficiency)
# - immutable bin building (open a plank, add a placement -> new bin)
# - run-level aggregation into an OptimizationResult
#
# These metrics are solver-agnostic: they work for any placement generator.

from __future__ import annotations

import math
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from .types import (
    BinStats,
    OptimizationResult,
    PackedBin,
    Placement,
    StockPiece,
    UnitCut,
    UnitStock,
)


def compute_bin_stats(
    plank: UnitStock,
    placements: Sequence[Placement],
    kerf: float,
    tolerance: float = 0.0,
) -> BinStats:
    """
    used area       = sum of cut footprints
    kerf loss       = sum of (placed_length + placed_width) * kerf
                      (each cut is charged the blade along its two leading edges,
                      also where it is flush with the plank border)
    waste area      = plank area - used area + kerf loss
    waste length    = plank length - sum of lengths, when every cut spans the full
                      plank width unrotated (strip cutting); otherwise waste area
                      spread over the plank width. Display value only.
    efficiency      = used area / plank area * 100 (kerf reported separately)
    """
    total = plank.area
    used = 0.0
    kerf_loss = 0.0
    strip_length = 0.0
    all_strips = True
    for pl in placements:
        used += pl.placed_length * pl.placed_width
        kerf_loss += (pl.placed_length + pl.placed_width) * kerf
        if not pl.rotated and abs(pl.placed_width - plank.width) <= tolerance:
            strip_length += pl.placed_length
        else:
            all_strips = False

    waste_area = total - used + kerf_loss
    if all_strips:
        waste_length = plank.length - strip_length
    else:
        waste_length = waste_area / plank.width

    return BinStats(
        used_area=used,
        kerf_loss_area=kerf_loss,
        waste_area=waste_area,
        waste_length=waste_length,
        efficiency=(used / total * 100.0) if total > 0 else 0.0,
    )


def open_bin(plank: UnitStock, kerf: float, tolerance: float = 0.0) -> PackedBin:
    """Empty bin for a fresh plank (stats of an untouched plank)."""
    return PackedBin(plank=plank, placements=(), stats=compute_bin_stats(plank, (), kerf, tolerance))


def add_placement(bin_: PackedBin, placement: Placement, kerf: float, tolerance: float = 0.0) -> PackedBin:
    """New bin with the placement appended and stats recomputed. Input bin is untouched."""
    placements = bin_.placements + (placement,)
    return PackedBin(
        plank=bin_.plank,
        placements=placements,
        stats=compute_bin_stats(bin_.plank, placements, kerf, tolerance),
    )


def total_waste_area(bins: Iterable[PackedBin]) -> float:
    return sum(b.stats.waste_area for b in bins if b.stats is not None and not b.is_empty)


def _reference_plank_area(stock: Sequence[StockPiece | UnitStock]) -> Optional[float]:
    """Area of the most common plank dimensions (by unit count, first seen wins ties)."""
    counts: Counter = Counter()
    order: List[Tuple[float, float]] = []
    for s in stock:
        key = (s.length, s.width)
        if key not in counts:
            order.append(key)
        counts[key] += getattr(s, "quantity", 1)
    if not order:
        return None
    best = max(order, key=lambda k: counts[k])  # max() keeps the first maximal key
    return best[0] * best[1]


def additional_planks_needed(
    unplaced: Sequence[UnitCut],
    stock: Sequence[StockPiece | UnitStock],
) -> int:
    """
    Estimate of extra planks needed for the unplaced cuts:
      ceil(sum of unplaced area / area of the most common plank size).
    Without any stock, every hypothetical plank is sized like the largest unplaced cut.
    An approximation, not a packing guarantee.
    """
    if not unplaced:
        return 0
    unplaced_area = sum(c.area for c in unplaced)
    ref = _reference_plank_area(stock)
    if ref is None or ref <= 0:
        ref = max(c.area for c in unplaced)
    return max(1, math.ceil(unplaced_area / ref))


def aggregate(
    bins: Sequence[PackedBin],
    unplaced: Sequence[UnitCut],
    stock: Sequence[StockPiece | UnitStock],
    *,
    fitness: Optional[float] = None,
    seed: Optional[int] = None,
    restarts: Sequence[float] = (),
) -> OptimizationResult:
    """
    Aggregate a packing into run-level totals.
    Pure: bins are read, never modified; planks without placements are excluded.
    """
    used_bins = tuple(b for b in bins if not b.is_empty)

    waste_area = 0.0
    waste_length = 0.0
    kerf_loss = 0.0
    used_area = 0.0
    plank_area = 0.0
    cuts_placed = 0
    for b in used_bins:
        st = b.stats
        waste_area += st.waste_area
        waste_length += st.waste_length
        kerf_loss += st.kerf_loss_area
        used_area += st.used_area
        plank_area += b.plank.area
        cuts_placed += len(b.placements)

    return OptimizationResult(
        optimized_planks=used_bins,
        total_waste_area=waste_area,
        total_waste_length=waste_length,
        saw_waste_area=kerf_loss,
        total_efficiency=(used_area / plank_area * 100.0) if plank_area > 0 else 0.0,
        planks_used=len(used_bins),
        cuts_placed=cuts_placed,
        unplaced_cuts=tuple(unplaced),
        additional_planks_needed=additional_planks_needed(unplaced, stock),
        fitness=fitness,
        seed=seed,
        restarts=tuple(restarts),
    )
