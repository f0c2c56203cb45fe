from __future__ import annotations

from collections.abc import Sequence


DECK_SIZE = 52
CARDS_PER_SUIT = 13
RANKS = "A23456789TJQK"
SUITS = "cdhs"


def canonical_deck() -> list[int]:
    return list(range(1, DECK_SIZE + 1))


def card_suit(card: int) -> int:
    """Suit index in 1..4; card 1-13 is suit 1."""
    return (card + CARDS_PER_SUIT - 1) // CARDS_PER_SUIT


def card_rank(card: int) -> int:
    return ((card - 1) % CARDS_PER_SUIT) + 1


def card_label(card: int) -> str:
    if not 1 <= card <= DECK_SIZE:
        raise ValueError(f"card {card} outside 1..{DECK_SIZE}")
    return f"{RANKS[card_rank(card) - 1]}{SUITS[card_suit(card) - 1]}"


def is_full_deck(cards: Sequence[int]) -> bool:
    return len(cards) == DECK_SIZE and sorted(cards) == canonical_deck()
