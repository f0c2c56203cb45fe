from __future__ import annotations

import hashlib
import json
from typing import Any


SEED_LENGTH = 32


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def combine_seeds(server_seed: bytes, client_seed: bytes) -> bytes:
    return sha256(server_seed + client_seed)


def stable_hash(payload: Any) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode(
        "utf-8",
    )
    return hashlib.sha256(encoded).hexdigest()
