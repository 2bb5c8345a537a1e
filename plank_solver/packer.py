# plank_solver/packer.py
# Greedy bottom-left packer.
# Cuts are processed strictly in the given order (the search owns that order);
# each cut goes to the open plank where it leaves the least plank length behind,
# otherwise a fresh plank is taken from the pool.
#
# Pure function of (stock pool, ordered cuts, rotation hints): no input is mutated.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .geometry import candidate_positions, fits_stock, is_valid_position
from .metrics import add_placement, open_bin, total_waste_area
from .types import PackedBin, Placement, UnitCut, UnitStock, effective_dims


@dataclass(frozen=True)
class PackResult:
    bins: Tuple[PackedBin, ...]
    unplaced: Tuple[UnitCut, ...]

    def waste_area(self) -> float:
        return total_waste_area(self.bins)

    def num_placed(self) -> int:
        return sum(len(b.placements) for b in self.bins)


def thickness_matches(plank: UnitStock, cut: UnitCut, tolerance: float) -> bool:
    return abs(plank.thickness - cut.thickness) <= tolerance


def find_best_position(
    bin_: PackedBin,
    cut: UnitCut,
    prefer_rotated: bool,
    kerf: float,
    tolerance: float,
) -> Optional[Tuple[Placement, float]]:
    """
    Best (placement, remaining_length) for this cut on this plank, or None.

    Preferred orientation first, then the alternate; candidates in bottom-left order.
    Score is the plank length left beyond the cut's right edge; the first candidate
    with the lowest score wins, so ties keep the preferred orientation and the
    bottom-left position.
    """
    if not thickness_matches(bin_.plank, cut, tolerance):
        return None

    orientations = [prefer_rotated]
    if cut.length != cut.width:
        orientations.append(not prefer_rotated)

    best: Optional[Placement] = None
    best_score = float("inf")
    candidates = candidate_positions(bin_, kerf)

    for rotated in orientations:
        length, width = effective_dims(cut, rotated)
        if not fits_stock(bin_, length, width, tolerance):
            continue
        for x, y in candidates:
            if not is_valid_position(bin_, x, y, length, width, kerf, tolerance):
                continue
            score = bin_.plank.length - (x + length)
            if score < best_score:
                best_score = score
                best = Placement(cut=cut, x=x, y=y, rotated=rotated)

    if best is None:
        return None
    return best, best_score


def pack(
    stock_units: Sequence[UnitStock],
    ordered_cuts: Sequence[UnitCut],
    rotation_hints: Optional[Dict[str, bool]] = None,
    *,
    kerf: float,
    tolerance: float,
) -> PackResult:
    """
    Assign every cut (in order) to a plank position or to the unplaced list.

    For each cut:
      1. among open planks with a valid position, pick the one leaving the least
         length remaining (earliest plank wins ties)
      2. otherwise open the first pooled plank of matching thickness that can
         take the cut and place it there
      3. otherwise record the cut as unplaced; the pool is left untouched

    rotation_hints maps cut uid -> preferred rotated flag (missing = unrotated).
    """
    hints = rotation_hints or {}
    pool: List[UnitStock] = list(stock_units)
    bins: List[PackedBin] = []
    unplaced: List[UnitCut] = []

    for cut in ordered_cuts:
        prefer_rotated = bool(hints.get(cut.uid, False))

        best_idx = -1
        best_placement: Optional[Placement] = None
        best_score = float("inf")
        for idx, b in enumerate(bins):
            found = find_best_position(b, cut, prefer_rotated, kerf, tolerance)
            if found is None:
                continue
            placement, score = found
            if score < best_score:
                best_idx, best_placement, best_score = idx, placement, score

        if best_placement is not None:
            bins[best_idx] = add_placement(bins[best_idx], best_placement, kerf, tolerance)
            continue

        # Open a fresh plank
        placed = False
        for pool_idx, plank in enumerate(pool):
            if not thickness_matches(plank, cut, tolerance):
                continue
            fresh = open_bin(plank, kerf, tolerance)
            found = find_best_position(fresh, cut, prefer_rotated, kerf, tolerance)
            if found is None:
                continue
            bins.append(add_placement(fresh, found[0], kerf, tolerance))
            del pool[pool_idx]
            placed = True
            break

        if not placed:
            unplaced.append(cut)

    return PackResult(bins=tuple(bins), unplaced=tuple(unplaced))


def order_by_area(cuts: Sequence[UnitCut]) -> List[UnitCut]:
    """Largest cuts first (stable); the classic greedy ordering."""
    return sorted(cuts, key=lambda c: -c.area)
