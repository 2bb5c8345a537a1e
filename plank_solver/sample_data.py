# plank_solver/sample_data.py
# Utilities to generate sample / random cut lists for quick benchmarking and tuning.
# This helps you stress-test the annealing schedule without needing real projects.

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .types import DemandPiece, StockPiece


@dataclass(frozen=True)
class RandomCutsConfig:
    seed: int = 123
    n_unique: int = 12
    qty_range: Tuple[int, int] = (1, 4)
    thickness: float = 18.0

    # size ranges (mm)
    length_range: Tuple[int, int] = (150, 900)
    width_range: Tuple[int, int] = (60, 280)

    # probability a cut is a full-width "strip" of the plank (shelves, rails)
    p_strip: float = 0.25


def example_stock() -> List[StockPiece]:
    """A small mixed rack: two common plank sizes, one thicker board."""
    return [
        StockPiece("pine_2400", 2400, 300, 18, material="pine", quantity=4),
        StockPiece("pine_1200", 1200, 300, 18, material="pine", quantity=2),
        StockPiece("oak_2000", 2000, 200, 27, material="oak", quantity=1),
    ]


def example_demand() -> List[DemandPiece]:
    """Parts for a small bookcase."""
    return [
        DemandPiece("side", 1800, 280, 18, quantity=2, label="Side"),
        DemandPiece("shelf", 760, 280, 18, quantity=4, label="Shelf"),
        DemandPiece("rail", 760, 80, 18, quantity=2, label="Rail"),
        DemandPiece("top", 800, 190, 27, quantity=1, label="Top"),
    ]


def generate_random_cuts(cfg: RandomCutsConfig, plank_width: float = 300.0) -> List[DemandPiece]:
    """
    Generate a list of DemandPiece with quantities and sizes.
    Designed to resemble furniture jobs: some full-width strips, some small parts.
    """
    rnd = random.Random(cfg.seed)
    cuts: List[DemandPiece] = []

    for i in range(cfg.n_unique):
        length = rnd.randint(*cfg.length_range)
        if rnd.random() < cfg.p_strip:
            width = plank_width
        else:
            width = rnd.randint(*cfg.width_range)

        cuts.append(
            DemandPiece(
                id=f"C{i+1:02d}",
                length=float(length),
                width=float(width),
                thickness=cfg.thickness,
                quantity=rnd.randint(*cfg.qty_range),
            )
        )

    return cuts
