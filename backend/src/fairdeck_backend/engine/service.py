from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Sequence
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from fairdeck_backend.engine.dealing import DealCoordinator
from fairdeck_backend.engine.errors import EngineRejectedOperation
from fairdeck_backend.engine.internal import DealState, GameRecord
from fairdeck_backend.engine.models import (
    AuditRecord,
    AuditVerification,
    CommitmentView,
    DealResponse,
    ErrorCode,
    GameView,
    HandView,
    RevealView,
)
from fairdeck_backend.engine.registry import Clock, SeedRegistry, require_seed_length
from fairdeck_backend.engine.shuffle import shuffle_deck
from fairdeck_backend.engine.verification import VerificationService, verify_audit
from fairdeck_backend.repo.base import GameRepository
from fairdeck_backend.utils.cards import card_label
from fairdeck_backend.utils.hashing import combine_seeds, stable_hash
from fairdeck_backend.utils.logger import get_logger


logger = get_logger(__name__)


class FairDealService:
    """Entry point for the game-lifecycle layer.

    Every operation on a game runs under that game's lock and writes its
    result to the record in one assignment after all checks pass.
    """

    def __init__(self, repository: GameRepository, clock: Clock | None = None) -> None:
        self._repo = repository
        self._registry = SeedRegistry(repository, clock)
        self._dealer = DealCoordinator()
        self._verifier = VerificationService(self._registry)

    async def commit_server_seed(self, game_id: str, server_seed_hash: bytes) -> CommitmentView:
        with self._log_rejections("commit", game_id):
            require_seed_length(server_seed_hash, "server_seed_hash")
            record = self._repo.get_or_create(game_id)
            async with record.lock:
                commitment = self._registry.commit(game_id, server_seed_hash)

        logger.info(f"Committed server seed for {game_id} (hash {commitment.server_seed_hash.hex()[:16]}...)")
        return CommitmentView(
            game_id=game_id,
            server_seed_hash=commitment.server_seed_hash.hex(),
            committed_at=commitment.committed_at.isoformat(),
        )

    async def reveal_seeds(self, game_id: str, server_seed: bytes, client_seed: bytes) -> RevealView:
        async with self._game_lock(game_id):
            with self._log_rejections("reveal", game_id):
                reveal = self._registry.reveal(game_id, server_seed, client_seed)

        logger.info(f"Revealed seeds for {game_id}")
        return RevealView(
            game_id=game_id,
            server_seed=reveal.server_seed.hex(),
            client_seed=reveal.client_seed.hex(),
            combined_seed=combine_seeds(reveal.server_seed, reveal.client_seed).hex(),
            revealed_at=reveal.revealed_at.isoformat(),
        )

    async def generate_shuffled_deck(self, game_id: str) -> list[int]:
        async with self._game_lock(game_id):
            with self._log_rejections("generate_shuffled_deck", game_id):
                return shuffle_deck(self._registry.combined_seed(game_id))

    async def shuffle_and_deal(
        self,
        game_id: str,
        players: Sequence[str],
        cards_per_player: int,
    ) -> DealResponse:
        async with self._game_lock(game_id) as record:
            with self._log_rejections("shuffle_and_deal", game_id):
                combined = self._registry.combined_seed(game_id)
                state = record.deal_state
                if state is None:
                    state = self._dealer.start_deal(game_id, shuffle_deck(combined))
                    logger.info(f"Shuffled deck for {game_id}")
                next_state, dealt = self._dealer.deal_initial_cards(state, players, cards_per_player)
                record.deal_state = next_state

        logger.info(f"Dealt {cards_per_player} card(s) to {len(dealt)} player(s) in {game_id}")
        return self._deal_response(next_state, dealt)

    async def deal_initial_cards(
        self,
        game_id: str,
        players: Sequence[str],
        cards_per_player: int,
    ) -> DealResponse:
        async with self._game_lock(game_id) as record:
            with self._log_rejections("deal_initial_cards", game_id):
                if record is None or record.deal_state is None:
                    raise EngineRejectedOperation(
                        ErrorCode.GAME_NOT_FOUND,
                        f"Game {game_id} has no shuffled deck to deal from.",
                    )
                next_state, dealt = self._dealer.deal_initial_cards(record.deal_state, players, cards_per_player)
                record.deal_state = next_state

        logger.info(f"Dealt {cards_per_player} card(s) to {len(dealt)} player(s) in {game_id}")
        return self._deal_response(next_state, dealt)

    async def verify_shuffle(self, game_id: str, claimed_deck: Sequence[int]) -> bool:
        async with self._game_lock(game_id):
            with self._log_rejections("verify_shuffle", game_id):
                valid = self._verifier.verify_shuffle(game_id, claimed_deck)
        if not valid:
            logger.warning(f"Claimed deck for {game_id} does not match the seeded shuffle")
        return valid

    async def get_game_view(self, game_id: str) -> GameView:
        async with self._game_lock(game_id) as record:
            if record is None:
                raise EngineRejectedOperation(ErrorCode.NOT_FOUND, f"Game {game_id} does not exist.")
            return self._build_game_view(record)

    async def export_audit(self, game_id: str) -> AuditRecord:
        async with self._game_lock(game_id) as record:
            with self._log_rejections("export_audit", game_id):
                reveal = self._registry.require_reveal(game_id)
            combined = combine_seeds(reveal.server_seed, reveal.client_seed)
            return AuditRecord(
                game_id=game_id,
                server_seed_hash=record.commitment.server_seed_hash.hex(),
                server_seed=reveal.server_seed.hex(),
                client_seed=reveal.client_seed.hex(),
                combined_seed=combined.hex(),
                deck=shuffle_deck(combined),
                committed_at=record.commitment.committed_at.isoformat(),
                revealed_at=reveal.revealed_at.isoformat(),
            )

    async def verify_audit_record(self, payload: dict[str, Any]) -> AuditVerification:
        result = verify_audit(AuditRecord.model_validate(payload))
        if not result.valid:
            failed = sorted(name for name, ok in result.checks.items() if not ok)
            logger.warning(f"Audit record for {result.game_id} failed checks: {', '.join(failed)}")
        return result

    @asynccontextmanager
    async def _game_lock(self, game_id: str) -> AsyncIterator[GameRecord | None]:
        try:
            record = self._repo.get(game_id)
        except KeyError:
            record = None
        if record is None:
            yield None
            return
        async with record.lock:
            yield record

    @contextmanager
    def _log_rejections(self, operation: str, game_id: str) -> Iterator[None]:
        try:
            yield
        except EngineRejectedOperation as exc:
            logger.warning(f"{operation} rejected for {game_id}: {exc.code.value} {exc.message}")
            raise

    def _deal_response(self, state: DealState, dealt: dict[str, list[int]]) -> DealResponse:
        return DealResponse(
            game_id=state.game_id,
            hands=[self._hand_view(player_id, cards) for player_id, cards in dealt.items()],
            next_index=state.next_index,
            cards_remaining=state.cards_remaining,
        )

    def _hand_view(self, player_id: str, cards: Sequence[int]) -> HandView:
        return HandView(player_id=player_id, cards=list(cards), labels=[card_label(card) for card in cards])

    def _build_game_view(self, record: GameRecord) -> GameView:
        state = record.deal_state
        hands = state.hands_by_player() if state is not None else {}
        public: dict[str, Any] = {
            "game_id": record.game_id,
            "stage": record.stage.value,
            "server_seed_hash": record.commitment.server_seed_hash.hex() if record.commitment else None,
            "server_seed": record.reveal.server_seed.hex() if record.reveal else None,
            "client_seed": record.reveal.client_seed.hex() if record.reveal else None,
            "next_index": state.next_index if state is not None else 0,
            "cards_remaining": state.cards_remaining if state is not None else None,
            "hands": hands,
        }
        return GameView(
            game_id=record.game_id,
            stage=record.stage,
            server_seed_hash=public["server_seed_hash"],
            server_seed=public["server_seed"],
            client_seed=public["client_seed"],
            next_index=public["next_index"],
            cards_remaining=public["cards_remaining"],
            hands=[self._hand_view(player_id, cards) for player_id, cards in hands.items()],
            state_hash=stable_hash(public),
        )

