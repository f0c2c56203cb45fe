from __future__ import annotations

import hmac
from collections.abc import Callable
from datetime import datetime, timezone

from fairdeck_backend.engine.errors import EngineRejectedOperation
from fairdeck_backend.engine.internal import GameRecord, SeedCommitment, SeedReveal
from fairdeck_backend.engine.models import ErrorCode
from fairdeck_backend.repo.base import GameRepository
from fairdeck_backend.utils.hashing import SEED_LENGTH, combine_seeds, sha256


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_seed_length(value: bytes, label: str) -> None:
    if len(value) != SEED_LENGTH:
        raise EngineRejectedOperation(
            ErrorCode.INVALID_SEED,
            f"{label} must be {SEED_LENGTH} bytes, got {len(value)}.",
        )


class SeedRegistry:
    """Commit-reveal bookkeeping for server and client seeds.

    Each method validates everything first and writes at most one field of
    the game record as its last step, so a rejected call never leaves a
    partial write behind.
    """

    def __init__(self, repository: GameRepository, clock: Clock | None = None) -> None:
        self._repo = repository
        self._clock = clock or utc_now

    def commit(self, game_id: str, server_seed_hash: bytes) -> SeedCommitment:
        require_seed_length(server_seed_hash, "server_seed_hash")
        record = self._repo.get_or_create(game_id)
        if record.commitment is not None:
            raise EngineRejectedOperation(
                ErrorCode.ALREADY_COMMITTED,
                f"Game {game_id} already has a server seed commitment.",
            )
        commitment = SeedCommitment(
            game_id=game_id,
            server_seed_hash=bytes(server_seed_hash),
            committed_at=self._clock(),
        )
        record.commitment = commitment
        return commitment

    def reveal(self, game_id: str, server_seed: bytes, client_seed: bytes) -> SeedReveal:
        require_seed_length(server_seed, "server_seed")
        require_seed_length(client_seed, "client_seed")
        record = self._find(game_id)
        if record is None or record.commitment is None:
            raise EngineRejectedOperation(
                ErrorCode.NOT_COMMITTED,
                f"Game {game_id} has no server seed commitment.",
            )
        if record.reveal is not None:
            raise EngineRejectedOperation(
                ErrorCode.ALREADY_REVEALED,
                f"Seeds for game {game_id} were already revealed.",
            )
        if not hmac.compare_digest(sha256(server_seed), record.commitment.server_seed_hash):
            raise EngineRejectedOperation(
                ErrorCode.SEED_MISMATCH,
                f"Server seed does not match the commitment for game {game_id}.",
            )
        reveal = SeedReveal(
            game_id=game_id,
            server_seed=bytes(server_seed),
            client_seed=bytes(client_seed),
            revealed_at=self._clock(),
        )
        record.reveal = reveal
        return reveal

    def combined_seed(self, game_id: str) -> bytes:
        reveal = self.require_reveal(game_id)
        return combine_seeds(reveal.server_seed, reveal.client_seed)

    def require_reveal(self, game_id: str) -> SeedReveal:
        record = self._find(game_id)
        if record is None or record.reveal is None:
            raise EngineRejectedOperation(
                ErrorCode.NOT_FOUND,
                f"No revealed seeds for game {game_id}.",
            )
        return record.reveal

    def _find(self, game_id: str) -> GameRecord | None:
        try:
            return self._repo.get(game_id)
        except KeyError:
            return None
