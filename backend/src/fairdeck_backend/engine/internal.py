from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from fairdeck_backend.engine.models import GameStage
from fairdeck_backend.utils.cards import DECK_SIZE


@dataclass(frozen=True)
class SeedCommitment:
    game_id: str
    server_seed_hash: bytes
    committed_at: datetime


@dataclass(frozen=True)
class SeedReveal:
    game_id: str
    server_seed: bytes
    client_seed: bytes
    revealed_at: datetime


@dataclass(frozen=True)
class DealState:
    game_id: str
    deck: tuple[int, ...]
    next_index: int = 0
    hands: tuple[tuple[str, tuple[int, ...]], ...] = ()

    @property
    def cards_remaining(self) -> int:
        return DECK_SIZE - self.next_index

    def hands_by_player(self) -> dict[str, list[int]]:
        return {player_id: list(cards) for player_id, cards in self.hands}


@dataclass
class GameRecord:
    game_id: str
    commitment: SeedCommitment | None = None
    reveal: SeedReveal | None = None
    deal_state: DealState | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def stage(self) -> GameStage:
        if self.deal_state is not None:
            return GameStage.DEALT if self.deal_state.next_index > 0 else GameStage.SHUFFLED
        if self.reveal is not None:
            return GameStage.REVEALED
        if self.commitment is not None:
            return GameStage.COMMITTED
        return GameStage.UNCOMMITTED
