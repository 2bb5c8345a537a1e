# plank_solver/rng.py
# Seeded linear congruential generator.
# Same seed -> same stream on every platform/Python version, which makes whole
# optimization runs reproducible bit for bit.

from __future__ import annotations

from typing import List, TypeVar

T = TypeVar("T")

# Numerical Recipes constants, modulus 2**32
_A = 1664525
_C = 1013904223
_MASK = 0xFFFFFFFF


class Lcg:
    def __init__(self, seed: int) -> None:
        self.state = int(seed) & _MASK

    def next_u32(self) -> int:
        self.state = (_A * self.state + _C) & _MASK
        return self.state

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self.next_u32() / 4294967296.0

    def randint(self, lo: int, hi: int) -> int:
        """Uniform int in [lo, hi] (inclusive)."""
        if hi < lo:
            raise ValueError(f"empty range [{lo}, {hi}]")
        return lo + int(self.random() * (hi - lo + 1))

    def shuffle(self, items: List[T]) -> None:
        """In-place Fisher-Yates shuffle."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i)
            items[i], items[j] = items[j], items[i]
