"""Seeded PCG32 random numbers shared by the simulation."""

from __future__ import annotations

import threading
from typing import Sequence, TypeVar

from vegsim import parameters

T = TypeVar("T")

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1
_MULTIPLIER = 6364136223846793005
DEFAULT_STREAM = 1442695040888963407 >> 1


class Pcg32:
    """PCG-XSH-RR generator with 64-bit state and 32-bit output."""

    def __init__(self, seed: int, stream: int = DEFAULT_STREAM) -> None:
        if seed < 0 or stream < 0:
            raise ValueError("seed and stream must be non-negative")
        self._state = 0
        self._inc = ((stream << 1) | 1) & _MASK64
        self._step()
        self._state = (self._state + seed) & _MASK64
        self._step()

    def _step(self) -> None:
        self._state = (self._state * _MULTIPLIER + self._inc) & _MASK64

    def next_u32(self) -> int:
        """Return the next 32-bit unsigned integer."""
        old = self._state
        self._step()
        xorshifted = (((old >> 18) ^ old) >> 27) & _MASK32
        rot = old >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def next_float(self) -> float:
        """Return a float uniformly drawn from [0, 1) with 23 bits of precision."""
        return (self.next_u32() >> 9) / float(1 << 23)

    def _below(self, bound: int) -> int:
        """Return an unbiased integer in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")
        shift = 32 - bound.bit_length()
        zone = ((bound << shift) & _MASK32) - 1
        while True:
            wide = self.next_u32() * bound
            if wide & _MASK32 <= zone:
                return wide >> 32

    def choose(self, items: Sequence[T]) -> T:
        """Return a random element of ``items``."""
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self._below(len(items))]


_lock = threading.Lock()
_generator = Pcg32(parameters.SEED)


def rand() -> float:
    """Draw a float in [0, 1) from the shared generator."""
    with _lock:
        return _generator.next_float()


def choose(items: Sequence[T]) -> T:
    """Pick a random element using the shared generator."""
    with _lock:
        return _generator.choose(items)


def reset() -> None:
    """Reseed the shared generator with the configured seed."""
    global _generator
    with _lock:
        _generator = Pcg32(parameters.SEED)