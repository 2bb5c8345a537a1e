# plank_solver/io_csv.py
# CSV import/export helpers:
# - project CSV (planks + cuts in one file) read/write
# - export placements per plank (cutting list)
# - export one-row-per-plank summary
#
# Project CSV format (header required):
#   Type,ID,Length,Width,Thickness,Material,Quantity,Label
#   Plank,p1,2000,300,18,oak,3,
#   Cut,shelf,760,280,18,,4,Shelf

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Tuple

from .types import DemandPiece, OptimizationResult, StockPiece
from .utils import as_quantity, sort_placements_readable

PROJECT_FIELDS = ["Type", "ID", "Length", "Width", "Thickness", "Material", "Quantity", "Label"]


def read_project_csv(path: str | Path) -> Tuple[List[StockPiece], List[DemandPiece]]:
    """Read planks and cuts from a project CSV. Blank lines are skipped."""
    path = Path(path)
    stock: List[StockPiece] = []
    demand: List[DemandPiece] = []
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        required = {"Type", "ID", "Length", "Width", "Thickness"}
        if not required.issubset(set(reader.fieldnames or [])):
            raise ValueError(f"CSV must contain at least columns: {sorted(required)}")
        for lineno, row in enumerate(reader, start=2):
            kind = (row.get("Type") or "").strip().lower()
            if not kind:
                continue
            try:
                item_id = (row.get("ID") or "").strip()
                length = float(row["Length"])
                width = float(row["Width"])
                thickness = float(row["Thickness"])
                qty = as_quantity(float(row.get("Quantity") or "1"))
            except (TypeError, ValueError) as e:
                raise ValueError(f"{path}:{lineno}: bad numeric value ({e})") from e
            if not item_id:
                raise ValueError(f"{path}:{lineno}: missing ID")

            if kind == "plank":
                stock.append(
                    StockPiece(
                        id=item_id,
                        length=length,
                        width=width,
                        thickness=thickness,
                        material=(row.get("Material") or "").strip(),
                        quantity=qty,
                    )
                )
            elif kind == "cut":
                demand.append(
                    DemandPiece(
                        id=item_id,
                        length=length,
                        width=width,
                        thickness=thickness,
                        quantity=qty,
                        label=(row.get("Label") or "").strip() or None,
                    )
                )
            else:
                raise ValueError(f"{path}:{lineno}: unknown Type '{row.get('Type')}' (expected Plank or Cut)")
    return stock, demand


def write_project_csv(stock: List[StockPiece], demand: List[DemandPiece], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=PROJECT_FIELDS)
        w.writeheader()
        for s in stock:
            w.writerow(
                {
                    "Type": "Plank",
                    "ID": s.id,
                    "Length": s.length,
                    "Width": s.width,
                    "Thickness": s.thickness,
                    "Material": s.material,
                    "Quantity": s.quantity,
                    "Label": "",
                }
            )
        for d in demand:
            w.writerow(
                {
                    "Type": "Cut",
                    "ID": d.id,
                    "Length": d.length,
                    "Width": d.width,
                    "Thickness": d.thickness,
                    "Material": "",
                    "Quantity": d.quantity,
                    "Label": d.label or "",
                }
            )


def export_placements_csv(result: OptimizationResult, path: str | Path) -> None:
    """
    Write placements into a CSV file, per plank in sawing order (y, then x).
    Coordinates are the lower-left corner in plank-local space.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "plank_index",
        "plank_uid",
        "cut_uid",
        "label",
        "x",
        "y",
        "length",
        "width",
        "rotated",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for idx, b in enumerate(result.optimized_planks):
            for pl in sort_placements_readable(list(b.placements)):
                w.writerow(
                    {
                        "plank_index": idx,
                        "plank_uid": b.plank.uid,
                        "cut_uid": pl.cut.uid,
                        "label": pl.cut.label or "",
                        "x": pl.x,
                        "y": pl.y,
                        "length": pl.placed_length,
                        "width": pl.placed_width,
                        "rotated": int(bool(pl.rotated)),
                    }
                )


def export_summary_csv(result: OptimizationResult, path: str | Path) -> None:
    """
    One-row-per-plank summary (useful for quick material ordering).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "plank_index",
        "plank_uid",
        "material",
        "length",
        "width",
        "thickness",
        "num_cuts",
        "used_area",
        "kerf_loss_area",
        "waste_area",
        "waste_length",
        "efficiency_pct",
    ]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for idx, b in enumerate(result.optimized_planks):
            st = b.stats
            w.writerow(
                {
                    "plank_index": idx,
                    "plank_uid": b.plank.uid,
                    "material": b.plank.material,
                    "length": b.plank.length,
                    "width": b.plank.width,
                    "thickness": b.plank.thickness,
                    "num_cuts": len(b.placements),
                    "used_area": round(st.used_area, 3),
                    "kerf_loss_area": round(st.kerf_loss_area, 3),
                    "waste_area": round(st.waste_area, 3),
                    "waste_length": round(st.waste_length, 3),
                    "efficiency_pct": round(st.efficiency, 2),
                }
            )


def export_unplaced_csv(result: OptimizationResult, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["cut_uid", "label", "length", "width", "thickness"])
        w.writeheader()
        for c in result.unplaced_cuts:
            w.writerow(
                {
                    "cut_uid": c.uid,
                    "label": c.label or "",
                    "length": c.length,
                    "width": c.width,
                    "thickness": c.thickness,
                }
            )


def export_all(result: OptimizationResult, out_dir: str | Path, prefix: str = "result") -> None:
    """
    Export placements, per-plank summary and unplaced cuts into out_dir.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    export_placements_csv(result, out_dir / f"{prefix}_placements.csv")
    export_summary_csv(result, out_dir / f"{prefix}_summary.csv")
    export_unplaced_csv(result, out_dir / f"{prefix}_unplaced.csv")
