# plank_solver/debug.py
# Debug / inspection helpers:
# - pretty-print cutting instructions per plank
# - quick text summaries of a result
# - helpful when tuning annealing parameters

from __future__ import annotations

from typing import List

from .types import OptimizationResult, PackedBin
from .utils import sort_placements_readable


def _fmt(v: float) -> str:
    return f"{v:g}"


def format_plank(index: int, b: PackedBin, unit: str = "mm") -> List[str]:
    p = b.plank
    st = b.stats
    lines = [
        f"=== Plank {index + 1}: {p.uid} ({_fmt(p.length)} x {_fmt(p.width)} x {_fmt(p.thickness)} {unit}"
        + (f", {p.material}" if p.material else "")
        + ") ===",
        f"Cuts: {len(b.placements)}  Efficiency: {st.efficiency:.1f}%  "
        f"Waste: {st.waste_area:,.0f} {unit}²  Kerf loss: {st.kerf_loss_area:,.0f} {unit}²  "
        f"Waste length: {st.waste_length:,.1f} {unit}",
    ]
    for n, pl in enumerate(sort_placements_readable(list(b.placements)), start=1):
        c = pl.cut
        name = f"{c.uid}" + (f" [{c.label}]" if c.label else "")
        lines.append(
            f"  Cut {n}: {name:24s} {_fmt(c.length)} x {_fmt(c.width)} {unit} "
            f"at ({pl.x:.1f}, {pl.y:.1f})" + (" (rotated)" if pl.rotated else "")
        )
    return lines


def format_result(res: OptimizationResult, unit: str = "mm") -> str:
    """Cutting instructions plus totals; unit only labels the numbers."""
    lines = [
        f"Planks used: {res.planks_used}",
        f"Cuts placed: {res.cuts_placed}",
        f"Total efficiency: {res.total_efficiency:.1f}%",
        f"Total waste area: {res.total_waste_area:,.0f} {unit}²",
        f"Total waste length: {res.total_waste_length:,.1f} {unit}",
        f"Saw (kerf) waste area: {res.saw_waste_area:,.0f} {unit}²",
    ]
    if res.seed is not None:
        lines.append(f"Seed: {res.seed}  Fitness: {res.fitness:,.1f}")
    for idx, b in enumerate(res.optimized_planks):
        lines.extend(format_plank(idx, b, unit))
    if res.unplaced_cuts:
        lines.append(f"-- Unplaced cuts ({len(res.unplaced_cuts)}) --")
        for c in res.unplaced_cuts:
            lines.append(f"  {c.uid}: {_fmt(c.length)} x {_fmt(c.width)} x {_fmt(c.thickness)} {unit}")
        lines.append(f"Additional planks needed (estimate): {res.additional_planks_needed}")
    return "\n".join(lines)


def print_result(res: OptimizationResult, unit: str = "mm") -> None:
    print(format_result(res, unit))
