from __future__ import annotations

from collections.abc import Sequence

from fairdeck_backend.engine.errors import EngineRejectedOperation
from fairdeck_backend.engine.internal import DealState
from fairdeck_backend.engine.models import ErrorCode
from fairdeck_backend.utils.cards import DECK_SIZE, is_full_deck


class DealCoordinator:
    """Hands out contiguous slices of a shuffled deck.

    Methods return a new ``DealState`` and never touch the one passed in; the
    caller stores the result only once the whole operation has succeeded.
    """

    def start_deal(self, game_id: str, deck: Sequence[int]) -> DealState:
        if not is_full_deck(deck):
            raise ValueError(f"deck for game {game_id} is not a permutation of 1..{DECK_SIZE}")
        return DealState(game_id=game_id, deck=tuple(deck))

    def deal_initial_cards(
        self,
        state: DealState,
        players: Sequence[str],
        cards_per_player: int,
    ) -> tuple[DealState, dict[str, list[int]]]:
        if cards_per_player < 1:
            raise EngineRejectedOperation(
                ErrorCode.INVALID_CARD_COUNT,
                f"cards_per_player must be at least 1, got {cards_per_player}.",
            )
        if not players:
            raise EngineRejectedOperation(ErrorCode.INVALID_PLAYERS, "At least one player is required.")
        if len(set(players)) != len(players):
            raise EngineRejectedOperation(ErrorCode.INVALID_PLAYERS, "Player ids must be unique.")

        requested = len(players) * cards_per_player
        if requested > state.cards_remaining:
            raise EngineRejectedOperation(
                ErrorCode.DECK_EXHAUSTED,
                f"Requested {requested} cards but only {state.cards_remaining} remain.",
            )

        cursor = state.next_index
        dealt: dict[str, list[int]] = {}
        for player_id in players:
            dealt[player_id] = list(state.deck[cursor : cursor + cards_per_player])
            cursor += cards_per_player

        accumulated = state.hands_by_player()
        for player_id, cards in dealt.items():
            accumulated.setdefault(player_id, []).extend(cards)

        next_state = DealState(
            game_id=state.game_id,
            deck=state.deck,
            next_index=cursor,
            hands=tuple((player_id, tuple(cards)) for player_id, cards in accumulated.items()),
        )
        return next_state, dealt
