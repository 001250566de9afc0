"""Domain-separated deterministic RNG using xxhash.

A roll depends only on (seed, domain, key, tick), so replaying the same
inputs with the same seed yields the same loot.
"""

from __future__ import annotations

import struct

import xxhash

from chunkrealm.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @staticmethod
    def key_for(label: str) -> int:
        """Stable 32-bit key for a string label (e.g. a chunk id)."""
        return xxhash.xxh32_intdigest(label.encode("utf-8"))

    def _hash(self, domain: Domain, key: int, tick: int) -> int:
        payload = struct.pack("<qiQq", self._seed, domain.value, key & self._MAX_UINT64, tick)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, tick) / (self._MAX_UINT64 + 1)

    def next_bool(self, domain: Domain, key: int, tick: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, tick) < probability
