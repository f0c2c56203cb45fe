from __future__ import annotations

import hashlib
import hmac

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fairdeck_backend.engine.shuffle import SeedStream, shuffle_deck
from fairdeck_backend.utils.cards import canonical_deck
from fairdeck_backend.utils.hashing import combine_seeds

from .helpers import CLIENT_SEED, GOLDEN_COMBINED_SEED_HEX, GOLDEN_DECK, SERVER_SEED, seed_from_label


def test_golden_vector_combined_seed_and_deck() -> None:
    combined = combine_seeds(SERVER_SEED, CLIENT_SEED)

    assert combined.hex() == GOLDEN_COMBINED_SEED_HEX
    assert shuffle_deck(combined) == GOLDEN_DECK


@settings(max_examples=60, deadline=None)
@given(seed=st.binary(min_size=32, max_size=32))
def test_shuffle_is_a_permutation_and_deterministic(seed: bytes) -> None:
    deck = shuffle_deck(seed)

    assert len(deck) == 52
    assert sorted(deck) == canonical_deck()
    assert shuffle_deck(seed) == deck


def test_distinct_seeds_give_distinct_decks() -> None:
    decks = {tuple(shuffle_deck(seed_from_label(f"seed-{i}"))) for i in range(64)}
    assert len(decks) == 64


def test_shuffle_is_not_limited_to_identity_or_reverse() -> None:
    identity = canonical_deck()
    reverse = identity[::-1]
    outputs = [shuffle_deck(seed_from_label(f"bit-{i}")) for i in range(16)]

    assert all(deck not in (identity, reverse) for deck in outputs)


def test_first_card_covers_many_values() -> None:
    first_cards = {shuffle_deck(seed_from_label(f"spread-{i}"))[0] for i in range(400)}
    assert len(first_cards) >= 45


def test_shuffle_rejects_short_seed() -> None:
    with pytest.raises(ValueError):
        shuffle_deck(b"\x00" * 16)


def test_seed_stream_reads_counter_mode_blocks() -> None:
    seed = seed_from_label("stream")
    stream = SeedStream(seed)

    block0 = hmac.new(seed, (0).to_bytes(8, "big"), hashlib.sha256).digest()
    block1 = hmac.new(seed, (1).to_bytes(8, "big"), hashlib.sha256).digest()

    assert stream.read(20) == block0[:20]
    assert stream.read(20) == block0[20:] + block1[:8]


def test_seed_stream_full_byte_draw_uses_raw_byte() -> None:
    seed = seed_from_label("byte")
    first_byte = hmac.new(seed, (0).to_bytes(8, "big"), hashlib.sha256).digest()[0]

    assert SeedStream(seed).randint_inclusive(255) == first_byte


@pytest.mark.parametrize("upper", [0, 1, 2, 7, 12, 51, 255, 256, 1000])
def test_seed_stream_draws_stay_in_range(upper: int) -> None:
    stream = SeedStream(seed_from_label(f"range-{upper}"))
    draws = [stream.randint_inclusive(upper) for _ in range(200)]

    assert all(0 <= value <= upper for value in draws)
    if upper:
        assert len(set(draws)) > 1


def test_seed_stream_rejects_negative_bound() -> None:
    with pytest.raises(ValueError):
        SeedStream(seed_from_label("neg")).randint_inclusive(-1)
