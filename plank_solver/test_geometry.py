# plank_solver/test_geometry.py
# Candidate generation and feasibility checks.
#   pytest plank_solver/test_geometry.py

from __future__ import annotations

from plank_solver.geometry import (
    candidate_positions,
    fits_stock,
    is_valid_position,
    rectangles_overlap,
)
from plank_solver.metrics import add_placement, open_bin
from plank_solver.packer import find_best_position
from plank_solver.types import Placement, UnitCut, UnitStock

KERF = 4.0
TOL = 0.1


def _plank(length=1000.0, width=500.0, thickness=18.0) -> UnitStock:
    return UnitStock(uid="p#1", source_id="p", length=length, width=width, thickness=thickness)


def _cut(uid="c#1", length=400.0, width=300.0, thickness=18.0) -> UnitCut:
    return UnitCut(uid=uid, source_id=uid.split("#")[0], length=length, width=width, thickness=thickness)


def test_empty_plank_only_offers_origin() -> None:
    assert candidate_positions(open_bin(_plank(), KERF), KERF) == [(0.0, 0.0)]


def test_candidates_right_and_above_sorted_bottom_left() -> None:
    b = add_placement(open_bin(_plank(), KERF), Placement(_cut(), 0.0, 0.0), KERF)
    assert candidate_positions(b, KERF) == [(0.0, 0.0), (404.0, 0.0), (0.0, 304.0)]


def test_candidates_use_rotated_footprint() -> None:
    b = add_placement(open_bin(_plank(), KERF), Placement(_cut(), 0.0, 0.0, rotated=True), KERF)
    # rotated 400x300 occupies 300 along the length, 400 along the width
    assert candidate_positions(b, KERF) == [(0.0, 0.0), (304.0, 0.0), (0.0, 404.0)]


def test_candidates_drop_duplicates() -> None:
    b = open_bin(_plank(), KERF)
    b = add_placement(b, Placement(_cut("a#1", 100, 100), 0.0, 0.0), KERF)
    b = add_placement(b, Placement(_cut("b#1", 100, 100), 104.0, 0.0), KERF)
    b = add_placement(b, Placement(_cut("c#1", 100, 100), 0.0, 104.0), KERF)
    cands = candidate_positions(b, KERF)
    assert len(cands) == len(set(cands))
    assert cands == sorted(cands, key=lambda p: (p[1], p[0]))


def test_kerf_clearance_is_required() -> None:
    b = add_placement(open_bin(_plank(), KERF), Placement(_cut(), 0.0, 0.0), KERF)
    assert is_valid_position(b, 404.0, 0.0, 400.0, 300.0, KERF, TOL)
    assert not is_valid_position(b, 403.0, 0.0, 400.0, 300.0, KERF, TOL)
    assert not is_valid_position(b, 0.0, 0.0, 100.0, 100.0, KERF, TOL)


def test_bounds_respect_tolerance() -> None:
    b = open_bin(_plank(), KERF)
    assert is_valid_position(b, 600.05, 0.0, 400.0, 300.0, KERF, TOL)
    assert not is_valid_position(b, 601.0, 0.0, 400.0, 300.0, KERF, TOL)
    assert not is_valid_position(b, 0.0, 201.0, 400.0, 300.0, KERF, TOL)


def test_touching_rectangles_do_not_overlap_without_kerf() -> None:
    assert not rectangles_overlap(0, 0, 10, 10, 10, 0, 10, 10, 0.0, TOL)
    assert not rectangles_overlap(0, 0, 10, 10, 0, 10, 10, 10, 0.0, TOL)
    assert rectangles_overlap(0, 0, 10, 10, 9, 9, 10, 10, 0.0, TOL)
    # symmetric
    assert rectangles_overlap(9, 9, 10, 10, 0, 0, 10, 10, 0.0, TOL)


def test_fits_stock_per_orientation() -> None:
    b = open_bin(_plank(100.0, 100.0), KERF)
    assert not fits_stock(b, 150.0, 50.0, TOL)
    assert not fits_stock(b, 50.0, 150.0, TOL)
    assert fits_stock(b, 100.05, 100.0, TOL)


def test_rotated_cut_uses_swapped_footprint() -> None:
    # plank is narrow along the length: a 300x100 cut only fits rotated (100 x 300)
    b = open_bin(_plank(200.0, 350.0), KERF)
    found = find_best_position(b, _cut(length=300.0, width=100.0), False, KERF, TOL)
    assert found is not None
    pl, _ = found
    assert pl.rotated
    assert (pl.placed_length, pl.placed_width) == (100.0, 300.0)
    assert pl.right <= 200.0 and pl.top <= 350.0


def test_preferred_orientation_falls_back_to_alternate() -> None:
    # rotated 100x300 would exceed the 200 width, so the hint cannot be honored
    b = open_bin(_plank(350.0, 200.0), KERF)
    found = find_best_position(b, _cut(length=300.0, width=100.0), True, KERF, TOL)
    assert found is not None
    assert not found[0].rotated
