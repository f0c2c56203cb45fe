from __future__ import annotations

import pytest

from fairdeck_backend.engine.errors import EngineRejectedOperation
from fairdeck_backend.engine.models import ErrorCode, GameStage
from fairdeck_backend.engine.registry import SeedRegistry
from fairdeck_backend.repo.in_memory import InMemoryGameRepository

from .helpers import (
    CLIENT_SEED,
    FIXED_NOW,
    GOLDEN_COMBINED_SEED_HEX,
    SERVER_SEED,
    SERVER_SEED_HASH_HEX,
    commitment_for,
    seed_from_label,
)


def test_commit_stores_commitment(registry: SeedRegistry, repository: InMemoryGameRepository) -> None:
    commitment = registry.commit("g1", bytes.fromhex(SERVER_SEED_HASH_HEX))

    assert commitment.server_seed_hash.hex() == SERVER_SEED_HASH_HEX
    assert commitment.committed_at == FIXED_NOW
    assert repository.get("g1").commitment == commitment
    assert repository.get("g1").stage is GameStage.COMMITTED


def test_second_commit_is_rejected_and_first_is_kept(registry: SeedRegistry, repository: InMemoryGameRepository) -> None:
    first = registry.commit("g1", commitment_for(SERVER_SEED))

    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.commit("g1", commitment_for(seed_from_label("other")))

    assert excinfo.value.code is ErrorCode.ALREADY_COMMITTED
    assert repository.get("g1").commitment == first


def test_reveal_without_commit_fails(registry: SeedRegistry) -> None:
    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.reveal("missing", SERVER_SEED, CLIENT_SEED)
    assert excinfo.value.code is ErrorCode.NOT_COMMITTED


def test_reveal_with_wrong_server_seed_fails_without_storing(
    registry: SeedRegistry,
    repository: InMemoryGameRepository,
) -> None:
    registry.commit("g1", commitment_for(SERVER_SEED))

    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.reveal("g1", seed_from_label("not-the-seed"), CLIENT_SEED)

    assert excinfo.value.code is ErrorCode.SEED_MISMATCH
    assert repository.get("g1").reveal is None


def test_second_reveal_is_rejected(registry: SeedRegistry, repository: InMemoryGameRepository) -> None:
    registry.commit("g1", commitment_for(SERVER_SEED))
    first = registry.reveal("g1", SERVER_SEED, CLIENT_SEED)

    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.reveal("g1", SERVER_SEED, seed_from_label("new-client"))

    assert excinfo.value.code is ErrorCode.ALREADY_REVEALED
    assert repository.get("g1").reveal == first


def test_combined_seed_matches_golden_value(registry: SeedRegistry) -> None:
    registry.commit("g1", commitment_for(SERVER_SEED))
    registry.reveal("g1", SERVER_SEED, CLIENT_SEED)

    assert registry.combined_seed("g1").hex() == GOLDEN_COMBINED_SEED_HEX


def test_combined_seed_requires_reveal(registry: SeedRegistry) -> None:
    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.combined_seed("unknown")
    assert excinfo.value.code is ErrorCode.NOT_FOUND

    registry.commit("g1", commitment_for(SERVER_SEED))
    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.combined_seed("g1")
    assert excinfo.value.code is ErrorCode.NOT_FOUND


@pytest.mark.parametrize("length", [0, 31, 33, 64])
def test_seed_lengths_are_checked_first(registry: SeedRegistry, repository: InMemoryGameRepository, length: int) -> None:
    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.commit("g1", b"\x00" * length)
    assert excinfo.value.code is ErrorCode.INVALID_SEED
    assert repository.all() == []

    with pytest.raises(EngineRejectedOperation) as excinfo:
        registry.reveal("g1", b"\x00" * length, CLIENT_SEED)
    assert excinfo.value.code is ErrorCode.INVALID_SEED
