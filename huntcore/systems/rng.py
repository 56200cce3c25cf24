"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of (seed, domain, key, index), so a sandbox
scenario regenerates identically from its seed regardless of draw order.

Formula: RNG_Value = Hash(Seed, Domain, Key, Index)
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from huntcore.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, index: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, index)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, index: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, index) / (self._MAX_UINT64 + 1)

    def next_uniform(self, domain: Domain, key: int, index: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + (high - low) * self.next_float(domain, key, index)

    def next_int(self, domain: Domain, key: int, index: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, index)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, index: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, index) < probability

    def choice(self, domain: Domain, key: int, index: int, items: Sequence[T]) -> T:
        return items[self.next_int(domain, key, index, 0, len(items) - 1)]
