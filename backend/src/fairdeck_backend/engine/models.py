from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


ENGINE_VERSION = "0.1.0"
SHUFFLE_ALGORITHM = "fisher-yates-hmac-sha256-ctr-v1"

HEX32_PATTERN = r"^[0-9a-fA-F]{64}$"


class GameStage(str, Enum):
    UNCOMMITTED = "uncommitted"
    COMMITTED = "committed"
    REVEALED = "revealed"
    SHUFFLED = "shuffled"
    DEALT = "dealt"


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    NOT_COMMITTED = "NOT_COMMITTED"
    ALREADY_COMMITTED = "ALREADY_COMMITTED"
    ALREADY_REVEALED = "ALREADY_REVEALED"
    SEED_MISMATCH = "SEED_MISMATCH"
    DECK_EXHAUSTED = "DECK_EXHAUSTED"
    INVALID_CARD_COUNT = "INVALID_CARD_COUNT"
    INVALID_SEED = "INVALID_SEED"
    INVALID_PLAYERS = "INVALID_PLAYERS"


class EngineError(BaseModel):
    code: ErrorCode
    message: str

    model_config = ConfigDict(extra="forbid")


class CommitRequest(BaseModel):
    server_seed_hash: str = Field(pattern=HEX32_PATTERN)

    model_config = ConfigDict(extra="forbid")


class RevealRequest(BaseModel):
    server_seed: str = Field(pattern=HEX32_PATTERN)
    client_seed: str = Field(pattern=HEX32_PATTERN)

    model_config = ConfigDict(extra="forbid")


class DealRequest(BaseModel):
    players: list[str]
    cards_per_player: int

    model_config = ConfigDict(extra="forbid")


class VerifyRequest(BaseModel):
    claimed_deck: list[int]

    model_config = ConfigDict(extra="forbid")


class CommitmentView(BaseModel):
    game_id: str
    server_seed_hash: str
    committed_at: str

    model_config = ConfigDict(extra="forbid")


class RevealView(BaseModel):
    game_id: str
    server_seed: str
    client_seed: str
    combined_seed: str
    revealed_at: str

    model_config = ConfigDict(extra="forbid")


class HandView(BaseModel):
    player_id: str
    cards: list[int]
    labels: list[str]

    model_config = ConfigDict(extra="forbid")


class DealResponse(BaseModel):
    game_id: str
    hands: list[HandView]
    next_index: int
    cards_remaining: int

    model_config = ConfigDict(extra="forbid")


class DeckResponse(BaseModel):
    game_id: str
    deck: list[int]

    model_config = ConfigDict(extra="forbid")


class VerifyResponse(BaseModel):
    game_id: str
    valid: bool

    model_config = ConfigDict(extra="forbid")


class GameView(BaseModel):
    game_id: str
    stage: GameStage
    server_seed_hash: str | None = None
    server_seed: str | None = None
    client_seed: str | None = None
    next_index: int = 0
    cards_remaining: int | None = None
    hands: list[HandView] = Field(default_factory=list)
    state_hash: str

    model_config = ConfigDict(extra="forbid")


class AuditRecord(BaseModel):
    game_id: str
    server_seed_hash: str = Field(pattern=HEX32_PATTERN)
    server_seed: str = Field(pattern=HEX32_PATTERN)
    client_seed: str = Field(pattern=HEX32_PATTERN)
    combined_seed: str = Field(pattern=HEX32_PATTERN)
    deck: list[int]
    shuffle_algorithm: str = SHUFFLE_ALGORITHM
    engine_version: str = ENGINE_VERSION
    committed_at: str | None = None
    revealed_at: str | None = None

    model_config = ConfigDict(extra="forbid")


class AuditVerification(BaseModel):
    game_id: str
    checks: dict[str, bool]
    valid: bool

    model_config = ConfigDict(extra="forbid")
