# plank_solver/geometry.py
# Candidate positions and feasibility tests for the bottom-left fill.
# Places parts as low and left as possible; candidates are generated from the
# corners of already placed cuts, so no explicit free-rectangle tracking is needed.
#
# All functions take kerf and tolerance explicitly (no ambient constants).

from __future__ import annotations

from typing import List, Tuple

from .types import PackedBin, Placement


def candidate_positions(bin_: PackedBin, kerf: float) -> List[Tuple[float, float]]:
    """
    Candidate lower-left corners for the next cut on this plank:
      - origin (0, 0)
      - right of every placement (x + placed_length + kerf, y)
      - above every placement (x, y + placed_width + kerf)
    Sorted by (y, x) so the lowest, then left-most, position comes first.
    """
    candidates = [(0.0, 0.0)]
    for pl in bin_.placements:
        # Try to place to the right of this placement
        candidates.append((pl.right + kerf, pl.y))
        # Try to place above this placement
        candidates.append((pl.x, pl.top + kerf))

    candidates.sort(key=lambda p: (p[1], p[0]))

    # Drop exact duplicates (stacked placements share corners), keep order
    out: List[Tuple[float, float]] = []
    seen = set()
    for c in candidates:
        if c not in seen:
            seen.add(c)
            out.append(c)
    return out


def rectangles_overlap(
    x1: float,
    y1: float,
    l1: float,
    w1: float,
    x2: float,
    y2: float,
    l2: float,
    w2: float,
    kerf: float,
    tolerance: float,
) -> bool:
    """
    True if the two rectangles are closer than `kerf` on both axes.
    They are separated if one ends (plus kerf) before the other starts, within tolerance.
    """
    return not (
        x1 + l1 + kerf <= x2 + tolerance or      # first is to the left
        x2 + l2 + kerf <= x1 + tolerance or      # first is to the right
        y1 + w1 + kerf <= y2 + tolerance or      # first is below
        y2 + w2 + kerf <= y1 + tolerance         # first is above
    )


def placements_overlap(a: Placement, b: Placement, kerf: float, tolerance: float) -> bool:
    return rectangles_overlap(
        a.x, a.y, a.placed_length, a.placed_width,
        b.x, b.y, b.placed_length, b.placed_width,
        kerf, tolerance,
    )


def fits_stock(bin_: PackedBin, length: float, width: float, tolerance: float) -> bool:
    """Footprint fits the empty plank at all (orientation pre-check)."""
    plank = bin_.plank
    return length <= plank.length + tolerance and width <= plank.width + tolerance


def is_valid_position(
    bin_: PackedBin,
    x: float,
    y: float,
    length: float,
    width: float,
    kerf: float,
    tolerance: float,
) -> bool:
    """Rectangle stays inside the plank and keeps kerf clearance to every placement."""
    plank = bin_.plank
    if x < -tolerance or y < -tolerance:
        return False
    if x + length > plank.length + tolerance or y + width > plank.width + tolerance:
        return False

    for pl in bin_.placements:
        if rectangles_overlap(
            x, y, length, width,
            pl.x, pl.y, pl.placed_length, pl.placed_width,
            kerf, tolerance,
        ):
            return False
    return True
