from __future__ import annotations

import hmac
from collections.abc import Sequence

from fairdeck_backend.engine.models import AuditRecord, AuditVerification
from fairdeck_backend.engine.registry import SeedRegistry
from fairdeck_backend.engine.shuffle import shuffle_deck
from fairdeck_backend.utils.cards import is_full_deck
from fairdeck_backend.utils.hashing import combine_seeds, sha256


class VerificationService:
    def __init__(self, registry: SeedRegistry) -> None:
        self._registry = registry

    def verify_shuffle(self, game_id: str, claimed_deck: Sequence[int]) -> bool:
        expected = shuffle_deck(self._registry.combined_seed(game_id))
        return list(claimed_deck) == expected


def verify_audit(record: AuditRecord) -> AuditVerification:
    """Re-derive every fairness check from an exported record alone."""
    server_seed = bytes.fromhex(record.server_seed)
    client_seed = bytes.fromhex(record.client_seed)
    combined = combine_seeds(server_seed, client_seed)

    checks = {
        "commitment_match": hmac.compare_digest(sha256(server_seed), bytes.fromhex(record.server_seed_hash)),
        "combined_seed_match": combined == bytes.fromhex(record.combined_seed),
        "deck_is_permutation": is_full_deck(record.deck),
        "deck_match": record.deck == shuffle_deck(combined),
    }
    return AuditVerification(game_id=record.game_id, checks=checks, valid=all(checks.values()))
