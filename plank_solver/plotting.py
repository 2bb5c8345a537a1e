# plank_solver/plotting.py
# Minimal matplotlib visualization: draw all used planks in one figure.
# Read-only consumer of OptimizationResult (placements are never modified).

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .types import OptimizationResult, PackedBin


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_dims: bool = True
    show_grid: bool = False
    font_size: int = 7
    padding: float = 20.0   # empty margin around each plank in drawing units
    max_cols: int = 1       # planks are usually long strips: stack them


def _hash_color(key: str) -> Tuple[float, float, float]:
    """Deterministic pastel-ish color from a string."""
    h = 2166136261
    for ch in key.encode("utf-8"):
        h ^= ch
        h *= 16777619
        h &= 0xFFFFFFFF
    # map to [0.3..0.9] range for readability
    r = 0.3 + ((h >> 0) & 0xFF) / 255 * 0.6
    g = 0.3 + ((h >> 8) & 0xFF) / 255 * 0.6
    b = 0.3 + ((h >> 16) & 0xFF) / 255 * 0.6
    return (r, g, b)


def _fmt(v: float) -> str:
    return f"{v:g}"


def _plank_title(index: int, b: PackedBin) -> str:
    p = b.plank
    bits = [f"Plank {index + 1}", f"{_fmt(p.length)}×{_fmt(p.width)}×{_fmt(p.thickness)}"]
    if p.material:
        bits.append(p.material)
    if b.stats is not None:
        bits.append(f"{b.stats.efficiency:.1f}% efficient")
        bits.append(f"waste {b.stats.waste_area:,.0f}")
    return " | ".join(bits)


def plot_result(
    result: OptimizationResult,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """
    Draw all used planks in one matplotlib figure.
    Coordinates are plank-local: x along the length, y along the width.
    """
    style = style or PlotStyle()

    n = len(result.optimized_planks)
    if n == 0:
        raise ValueError("Result has no used planks to plot")

    cols = min(style.max_cols, n)
    rows = (n + cols - 1) // cols

    if figsize is None:
        # heuristic sizing: wide and short per plank
        figsize = (10 * cols, 2.5 * rows)

    fig, axes = plt.subplots(rows, cols, figsize=figsize, squeeze=False)
    ax_list: List[plt.Axes] = list(axes.ravel())

    for ax in ax_list[n:]:
        ax.axis("off")

    for idx, b in enumerate(result.optimized_planks):
        ax = ax_list[idx]
        L, W = b.plank.length, b.plank.width

        # Plank outline
        ax.add_patch(Rectangle((0, 0), L, W, fill=False, linewidth=1.2))

        for pl in b.placements:
            color = _hash_color(pl.cut.source_id)  # group by base cut id
            ax.add_patch(
                Rectangle(
                    (pl.x, pl.y),
                    pl.placed_length,
                    pl.placed_width,
                    facecolor=color,
                    edgecolor="black",
                    linewidth=0.8,
                )
            )

            if style.show_labels or style.show_dims:
                lines: List[str] = []
                if style.show_labels:
                    lines.append(pl.cut.label or pl.cut.uid)
                if style.show_dims:
                    lines.append(
                        f"{_fmt(pl.placed_length)}×{_fmt(pl.placed_width)}" + (" R" if pl.rotated else "")
                    )
                ax.text(
                    pl.x + pl.placed_length / 2,
                    pl.y + pl.placed_width / 2,
                    "\n".join(lines),
                    ha="center",
                    va="center",
                    fontsize=style.font_size,
                    color="black",
                )

        ax.set_title(_plank_title(idx, b), fontsize=10)
        ax.set_aspect("equal", adjustable="box")

        pad = style.padding
        ax.set_xlim(-pad, L + pad)
        ax.set_ylim(-pad, W + pad)

        if style.show_grid:
            ax.grid(True, linewidth=0.3)
        else:
            ax.grid(False)
        ax.tick_params(labelbottom=False, labelleft=False, bottom=False, left=False)

    fig.tight_layout()
    return fig


def show_result(result: OptimizationResult, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_result(result, style=style)
    plt.show()


def save_result_png(
    result: OptimizationResult,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 200,
) -> None:
    """Save the cutting diagram to PNG."""
    fig = plot_result(result, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
