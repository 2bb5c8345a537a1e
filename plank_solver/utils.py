# plank_solver/utils.py
# Small utilities used across the project:
# - timing context manager
# - stable sorting helpers
# - simple JSON export for results (placements + per-plank stats + totals)
#
# Keeps dependencies minimal (stdlib only).

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

from .types import OptimizationResult, PackedBin, Placement, UnitCut


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("optimize") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def _cut_to_dict(c: UnitCut) -> Dict[str, Any]:
    return {
        "uid": c.uid,
        "id": c.source_id,
        "length": c.length,
        "width": c.width,
        "thickness": c.thickness,
        "label": c.label,
    }


def bin_to_dict(b: PackedBin) -> Dict[str, Any]:
    st = b.stats
    return {
        "plank": {
            "uid": b.plank.uid,
            "id": b.plank.source_id,
            "length": b.plank.length,
            "width": b.plank.width,
            "thickness": b.plank.thickness,
            "material": b.plank.material,
        },
        "placements": [
            {
                "cut": _cut_to_dict(pl.cut),
                "x": pl.x,
                "y": pl.y,
                "rotated": bool(pl.rotated),
                "placed_length": pl.placed_length,
                "placed_width": pl.placed_width,
            }
            for pl in b.placements
        ],
        "stats": {
            "used_area": st.used_area,
            "kerf_loss_area": st.kerf_loss_area,
            "waste_area": st.waste_area,
            "waste_length": st.waste_length,
            "efficiency": st.efficiency,
        },
    }


def result_to_dict(res: OptimizationResult) -> Dict[str, Any]:
    """
    Convert OptimizationResult to a JSON-friendly dict.
    """
    return {
        "optimized_planks": [bin_to_dict(b) for b in res.optimized_planks],
        "totals": {
            "total_waste_area": res.total_waste_area,
            "total_waste_length": res.total_waste_length,
            "saw_waste_area": res.saw_waste_area,
            "total_efficiency": res.total_efficiency,
            "planks_used": res.planks_used,
            "cuts_placed": res.cuts_placed,
            "additional_planks_needed": res.additional_planks_needed,
        },
        "unplaced_cuts": [_cut_to_dict(c) for c in res.unplaced_cuts],
        "search": {
            "fitness": res.fitness,
            "seed": res.seed,
            "restart_fitness": list(res.restarts),
        },
    }


def save_result_json(res: OptimizationResult, path: str | Path, *, indent: int = 2) -> None:
    """Save result (placements + stats + totals) into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(res), f, ensure_ascii=False, indent=indent)


def as_quantity(value: Any) -> Any:
    """
    Whole-number floats (3.0 from CSV text or JSON) become int. Anything else is
    returned unchanged, so 2.5 reaches input validation and is rejected there.
    """
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def sort_placements_readable(placements: List[Placement]) -> List[Placement]:
    """
    Stable readable ordering (sawing order): by y, then x, then cut uid.
    Helpful for cutting lists and debugging diffs.
    """
    return sorted(placements, key=lambda p: (p.y, p.x, p.cut.uid))


def placement_signature(res: OptimizationResult) -> List[Tuple[str, str, float, float, bool]]:
    """Flat (plank uid, cut uid, x, y, rotated) list; equal signatures = identical layouts."""
    return [
        (b.plank.uid, pl.cut.uid, pl.x, pl.y, pl.rotated)
        for b in res.optimized_planks
        for pl in b.placements
    ]
