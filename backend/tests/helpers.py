from __future__ import annotations

import hashlib
from datetime import datetime, timezone


FIXED_NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

SERVER_SEED = bytes(32)
CLIENT_SEED = bytes([0x01] * 32)

# SHA-256 of 32 zero bytes.
SERVER_SEED_HASH_HEX = "66687aadf862bd776c8fc18b8e9f8e20089714856ee233b3902a591d0d5f2925"
GOLDEN_COMBINED_SEED_HEX = "5c85955f709283ecce2b74f1b1552918819f390911816e7bb466805a38ab87f3"
GOLDEN_DECK = [
    2, 24, 1, 21, 20, 44, 3, 52, 43, 13, 45, 46, 31, 37, 47, 10, 40, 25, 19, 51, 41, 22, 8, 16, 34, 26,
    18, 32, 39, 7, 28, 30, 36, 38, 49, 35, 48, 11, 23, 27, 15, 33, 50, 9, 4, 5, 6, 17, 12, 14, 29, 42,
]


def commitment_for(server_seed: bytes) -> bytes:
    return hashlib.sha256(server_seed).digest()


def seed_from_label(label: str) -> bytes:
    return hashlib.sha256(label.encode("utf-8")).digest()
