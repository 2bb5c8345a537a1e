# plank_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (kerf, tolerance, annealing schedule) in one place.

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Defaults:
    # Typical circular saw blade (mm)
    default_kerf: float = 4.0

    # Absorbs floating point noise on boundaries (same unit as dimensions)
    default_tolerance: float = 0.1

    # Annealing schedule
    default_iterations: int = 2000
    default_start_temperature: float = 1.0
    default_end_temperature: float = 0.01
    default_neighbors: int = 3
    default_restarts: int = 2

    # One unplaced cut must outweigh any realistic waste sum
    default_unplaced_penalty: float = 1e12

    # Thread pool size for independent restarts (1 = run sequentially)
    default_workers: int = 1

    # Packings remembered per restart (least recently used are dropped)
    default_cache_size: int = 4096

    # Length unit of all dimensions; a display label only, nothing is converted
    default_unit: str = "mm"


DEFAULTS = Defaults()

UNITS = ("mm", "cm", "inches")


@dataclass(frozen=True)
class SAConfig:
    """
    Simulated annealing + packing configuration, threaded through every call.
    seed=None means "derive from the clock" (resolved once per optimize call).
    """
    iterations: int = DEFAULTS.default_iterations
    start_temperature: float = DEFAULTS.default_start_temperature
    end_temperature: float = DEFAULTS.default_end_temperature
    neighbors_per_iteration: int = DEFAULTS.default_neighbors
    unplaced_penalty: float = DEFAULTS.default_unplaced_penalty
    random_restarts: int = DEFAULTS.default_restarts
    seed: Optional[int] = None
    kerf_thickness: float = DEFAULTS.default_kerf
    position_tolerance: float = DEFAULTS.default_tolerance

    workers: int = DEFAULTS.default_workers
    time_limit_s: Optional[float] = None

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.start_temperature <= 0 or self.end_temperature <= 0:
            raise ValueError("temperatures must be positive")
        if self.end_temperature > self.start_temperature:
            raise ValueError(
                f"end_temperature ({self.end_temperature}) must not exceed "
                f"start_temperature ({self.start_temperature})"
            )
        if self.neighbors_per_iteration < 1:
            raise ValueError("neighbors_per_iteration must be >= 1")
        if self.random_restarts < 0:
            raise ValueError("random_restarts must be >= 0")
        if self.unplaced_penalty <= 0 or not math.isfinite(self.unplaced_penalty):
            raise ValueError("unplaced_penalty must be a positive finite number")
        if self.kerf_thickness < 0:
            raise ValueError("kerf_thickness must be non-negative")
        if self.position_tolerance < 0:
            raise ValueError("position_tolerance must be non-negative")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")
        if self.time_limit_s is not None and self.time_limit_s <= 0:
            raise ValueError("time_limit_s must be positive when set")


def make_config(**overrides) -> SAConfig:
    """
    Convenience factory: SAConfig with defaults, selectively overridden.
    Unknown keys raise TypeError (same as the dataclass constructor).
    """
    return replace(SAConfig(), **overrides)


def resolve_seed(config: SAConfig) -> int:
    """Explicit seed if given, otherwise a time-derived 32-bit value."""
    if config.seed is not None:
        return int(config.seed) & 0xFFFFFFFF
    return int(time.time() * 1000) & 0xFFFFFFFF


def parse_dims_text(dims_text: str) -> Tuple[float, float, float]:
    """
    Parse '1000x500x18' -> (1000.0, 500.0, 18.0)  (length x width x thickness)
    """
    s = dims_text.lower().replace(" ", "")
    parts = s.split("x")
    if len(parts) != 3:
        raise ValueError("dims_text must be like '1000x500x18' (length x width x thickness)")
    a, b, c = (float(v) for v in parts)
    return a, b, c


def check_unit(unit: str) -> str:
    if unit not in UNITS:
        raise ValueError(f"unit must be one of {UNITS}, got {unit!r}")
    return unit
