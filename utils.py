# utils.py
import itertools
import secrets
import numpy as np
from typing import Iterable, List, Optional

import constants as const


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (unlike Python's floor division)."""
    if denominator == 0:
        raise ZeroDivisionError("trunc_div by zero")
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def split_evenly(total: int, parts: int) -> List[int]:
    """
    Splits an integer into `parts` integer steps whose sum is exactly `total`.
    Each step differs from total/parts by less than one unit.
    """
    if parts <= 0:
        raise ValueError("Number of parts must be positive.")
    return [
        trunc_div(total * i, parts) - trunc_div(total * (i - 1), parts)
        for i in range(1, parts + 1)
    ]


# --- Random Sources ---
class RandomSource:
    """Supplies uniformly distributed unsigned 32-bit integers."""

    def next_u32(self) -> int:
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """Draws from the operating system's entropy pool."""

    def next_u32(self) -> int:
        return secrets.randbits(32)


class SeededRandomSource(RandomSource):
    """Reproducible source backed by numpy's default bit generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_u32(self) -> int:
        return int(self._rng.integers(0, const.U32_MASK + 1, dtype=np.int64))


class ReplayRandomSource(RandomSource):
    """Replays a fixed sequence of values, cycling when it runs out."""

    def __init__(self, values: Iterable[int]):
        self.values = [int(v) & const.U32_MASK for v in values]
        if not self.values:
            raise ValueError("Replay sequence must contain at least one value.")
        self._cycle = itertools.cycle(self.values)

    def next_u32(self) -> int:
        return next(self._cycle)


class RecordingRandomSource(RandomSource):
    """Wraps another source and remembers every value it hands out."""

    def __init__(self, inner: RandomSource):
        self.inner = inner
        self.recorded: List[int] = []

    def next_u32(self) -> int:
        value = self.inner.next_u32() & const.U32_MASK
        self.recorded.append(value)
        return value

    def replay(self) -> ReplayRandomSource:
        """Returns a source that yields the recorded draws in order."""
        return ReplayRandomSource(self.recorded or [0])
