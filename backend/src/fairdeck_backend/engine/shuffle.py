"""Deterministic deck derivation from a 32-byte seed.

The byte stream is HMAC-SHA256 in counter mode: block ``k`` is
``HMAC(key=seed, msg=k.to_bytes(8, "big"))`` and blocks are read front to
back. Integers in ``[0, upper]`` are drawn by reading the fewest whole bytes
that cover ``upper.bit_length()`` bits, masking to that many bits and
rejecting values above ``upper``. The deck is produced by a Fisher-Yates pass
from the last index down to 1 over the canonical order ``[1..52]``.

Any implementation following those three rules reproduces the same deck for
the same seed.
"""
from __future__ import annotations

import hashlib
import hmac

from fairdeck_backend.utils.cards import DECK_SIZE, canonical_deck
from fairdeck_backend.utils.hashing import SEED_LENGTH


class SeedStream:
    def __init__(self, seed: bytes) -> None:
        if len(seed) != SEED_LENGTH:
            raise ValueError(f"seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        self._seed = seed
        self._counter = 0
        self._buffer = b""

    def read(self, count: int) -> bytes:
        while len(self._buffer) < count:
            block = hmac.new(self._seed, self._counter.to_bytes(8, "big"), hashlib.sha256).digest()
            self._buffer += block
            self._counter += 1
        chunk, self._buffer = self._buffer[:count], self._buffer[count:]
        return chunk

    def randint_inclusive(self, upper: int) -> int:
        if upper < 0:
            raise ValueError("upper bound must be non-negative")
        if upper == 0:
            return 0
        bits = upper.bit_length()
        width = (bits + 7) // 8
        mask = (1 << bits) - 1
        while True:
            value = int.from_bytes(self.read(width), "big") & mask
            if value <= upper:
                return value


def shuffle_deck(seed: bytes) -> list[int]:
    stream = SeedStream(seed)
    deck = canonical_deck()
    for index in range(DECK_SIZE - 1, 0, -1):
        swap_with = stream.randint_inclusive(index)
        deck[index], deck[swap_with] = deck[swap_with], deck[index]
    return deck
