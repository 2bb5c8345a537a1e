# plank_solver/validate.py
# Validation utilities:
# - input checks (positive dimensions and quantities, unique plank and cut ids)
# - result checks: containment, kerf clearance, thickness gating, conservation
#
# Input problems abort a run (InvalidInputError). Result problems mean a solver bug.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .config import SAConfig
from .geometry import placements_overlap
from .types import DemandPiece, OptimizationResult, PackedBin, StockPiece


class InvalidInputError(ValueError):
    """Stock or demand cannot be optimized (raised before any work is done)."""

    def __init__(self, issues: Sequence["ValidationIssue"]):
        self.issues = list(issues)
        msg = "\n".join(f"[{i.level}] {i.item_id or '-'} :: {i.message}" for i in self.issues)
        super().__init__("Invalid input:\n" + msg)


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    item_id: Optional[str] = None
    plank_uid: Optional[str] = None


def _positive_number(v) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v) and v > 0


def _positive_int(v) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v > 0


def _check_piece(kind: str, piece, issues: List[ValidationIssue]) -> None:
    for attr in ("length", "width", "thickness"):
        v = getattr(piece, attr)
        if not _positive_number(v):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"{kind} {attr} must be a positive number, got {v!r}",
                    item_id=piece.id,
                )
            )
    if not _positive_int(piece.quantity):
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"{kind} quantity must be a positive integer, got {piece.quantity!r}",
                item_id=piece.id,
            )
        )


def validate_inputs(stock: Iterable[StockPiece], demand: Iterable[DemandPiece]) -> List[ValidationIssue]:
    # Unit uids are "<id>#<k>", so ids must be unique within stock and within demand
    issues: List[ValidationIssue] = []
    seen = set()
    for s in stock:
        _check_piece("plank", s, issues)
        if s.id in seen:
            issues.append(ValidationIssue(level="ERROR", message="duplicate plank id", item_id=s.id))
        seen.add(s.id)

    seen = set()
    for d in demand:
        _check_piece("cut", d, issues)
        if d.id in seen:
            issues.append(ValidationIssue(level="ERROR", message="duplicate cut id", item_id=d.id))
        seen.add(d.id)
    return issues


def raise_on_invalid_input(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        raise InvalidInputError(errs)


def _validate_bin(b: PackedBin, kerf: float, tol: float) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    plank = b.plank
    for pl in b.placements:
        if (
            pl.x < -tol
            or pl.y < -tol
            or pl.right > plank.length + tol
            or pl.top > plank.width + tol
        ):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=(
                        f"Placement out of plank bounds: x={pl.x}, y={pl.y}, "
                        f"l={pl.placed_length}, w={pl.placed_width}, plank={plank.length}x{plank.width}"
                    ),
                    item_id=pl.cut.uid,
                    plank_uid=plank.uid,
                )
            )
        if abs(pl.cut.thickness - plank.thickness) > tol:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Thickness mismatch: cut {pl.cut.thickness} on plank {plank.thickness}",
                    item_id=pl.cut.uid,
                    plank_uid=plank.uid,
                )
            )

    pls = b.placements
    for i in range(len(pls)):
        for j in range(i + 1, len(pls)):
            if placements_overlap(pls[i], pls[j], kerf, tol):
                issues.append(
                    ValidationIssue(
                        level="ERROR",
                        message=f"Overlap (kerf {kerf}) between {pls[i].cut.uid} and {pls[j].cut.uid}",
                        item_id=pls[i].cut.uid,
                        plank_uid=plank.uid,
                    )
                )
    return issues


def validate_result(
    result: OptimizationResult,
    demand: Sequence[DemandPiece],
    config: SAConfig,
) -> List[ValidationIssue]:
    """
    Check the packing invariants. Returns a list of issues (empty if OK).
    """
    kerf, tol = config.kerf_thickness, config.position_tolerance
    issues: List[ValidationIssue] = []

    for b in result.optimized_planks:
        issues.extend(_validate_bin(b, kerf, tol))

    # Conservation: every expanded cut is placed or unplaced, exactly once
    expected = sum(d.quantity for d in demand)
    uids = [pl.cut.uid for pl in result.all_placements()] + [c.uid for c in result.unplaced_cuts]
    if len(uids) != expected:
        issues.append(
            ValidationIssue(
                level="ERROR",
                message=f"Cut count mismatch: placed+unplaced={len(uids)}, demanded={expected}",
            )
        )
    if len(set(uids)) != len(uids):
        issues.append(ValidationIssue(level="ERROR", message="A cut appears more than once in the result"))

    if result.unplaced_cuts:
        issues.append(
            ValidationIssue(
                level="WARN",
                message=f"{len(result.unplaced_cuts)} cut(s) could not be placed",
            )
        )
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(
            f"[{e.level}] plank={e.plank_uid} cut={e.item_id} :: {e.message}" for e in errs
        )
        raise ValueError("Validation failed:\n" + msg)
