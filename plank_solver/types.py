# plank_solver/types.py
# Core data structures for plank cutting (stock planks, required cuts, packed bins).
# Keep this file dependency-light so it can be imported everywhere.
#
# Axis convention used everywhere in the package:
#   x runs along the plank LENGTH, y runs along the plank WIDTH.
#   (0, 0) is the lower-left corner of the plank.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple


# ----------------------------
# Inputs
# ----------------------------

@dataclass(frozen=True)
class StockPiece:
    """Available stock ("plank"): quantity identical physical pieces."""
    id: str
    length: float
    width: float
    thickness: float
    material: str = ""
    quantity: int = 1

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class DemandPiece:
    """A required rectangular cut."""
    id: str
    length: float
    width: float
    thickness: float
    quantity: int = 1
    label: Optional[str] = None

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class UnitStock:
    """A single plank instance (expanded from quantity)."""
    uid: str              # e.g. "oak_2000#2"
    source_id: str
    length: float
    width: float
    thickness: float
    material: str = ""

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class UnitCut:
    """A single cut instance (expanded from quantity)."""
    uid: str              # e.g. "shelf#3"
    source_id: str
    length: float
    width: float
    thickness: float
    label: Optional[str] = None

    @property
    def area(self) -> float:
        return self.length * self.width


def expand_stock(stock: Iterable[StockPiece]) -> List[UnitStock]:
    """Expand quantity into unit planks (stable order)."""
    out: List[UnitStock] = []
    for s in stock:
        for k in range(1, s.quantity + 1):
            out.append(
                UnitStock(
                    uid=f"{s.id}#{k}",
                    source_id=s.id,
                    length=s.length,
                    width=s.width,
                    thickness=s.thickness,
                    material=s.material,
                )
            )
    return out


def expand_demand(demand: Iterable[DemandPiece]) -> List[UnitCut]:
    """Expand quantity into unique cut instances (stable order)."""
    out: List[UnitCut] = []
    for d in demand:
        for k in range(1, d.quantity + 1):
            out.append(
                UnitCut(
                    uid=f"{d.id}#{k}",
                    source_id=d.id,
                    length=d.length,
                    width=d.width,
                    thickness=d.thickness,
                    label=d.label,
                )
            )
    return out


# ----------------------------
# Outputs / packing objects
# ----------------------------

def effective_dims(cut: UnitCut, rotated: bool) -> Tuple[float, float]:
    """(length, width) of a cut as laid on the plank."""
    if rotated:
        return cut.width, cut.length
    return cut.length, cut.width


@dataclass(frozen=True)
class Placement:
    """Placed cut on a plank; (x, y) is the lower-left corner."""
    cut: UnitCut
    x: float
    y: float
    rotated: bool = False

    @property
    def placed_length(self) -> float:
        return self.cut.width if self.rotated else self.cut.length

    @property
    def placed_width(self) -> float:
        return self.cut.length if self.rotated else self.cut.width

    @property
    def right(self) -> float:
        return self.x + self.placed_length

    @property
    def top(self) -> float:
        return self.y + self.placed_width

    @property
    def area(self) -> float:
        return self.cut.length * self.cut.width


@dataclass(frozen=True)
class BinStats:
    used_area: float
    kerf_loss_area: float
    waste_area: float
    waste_length: float
    efficiency: float  # percent, pre-kerf used area / plank area


@dataclass(frozen=True)
class PackedBin:
    """
    One plank instance and the cuts assigned to it.
    Immutable: adding a placement produces a new PackedBin (see metrics.add_placement).
    Placements are kept in insertion order.
    """
    plank: UnitStock
    placements: Tuple[Placement, ...] = ()
    stats: Optional[BinStats] = None

    @property
    def is_empty(self) -> bool:
        return not self.placements


@dataclass(frozen=True)
class OptimizationResult:
    """Full optimization outcome across all used planks."""
    optimized_planks: Tuple[PackedBin, ...]
    total_waste_area: float
    total_waste_length: float
    saw_waste_area: float
    total_efficiency: float
    planks_used: int
    cuts_placed: int
    unplaced_cuts: Tuple[UnitCut, ...]
    additional_planks_needed: int

    # Search bookkeeping (None for results not produced by the search)
    fitness: Optional[float] = None
    seed: Optional[int] = None
    restarts: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def yield_percent(self) -> float:
        return self.total_efficiency

    def all_placements(self) -> List[Placement]:
        out: List[Placement] = []
        for b in self.optimized_planks:
            out.extend(b.placements)
        return out
