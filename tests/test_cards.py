from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from fivecrowns import cards
from fivecrowns.cards import Card, Rank, Suit


@pytest.mark.parametrize(
    ("card", "round_rank", "expected"),
    [
        (Card.joker(), Rank.SEVEN, 50),
        (Card(Rank.SEVEN, Suit.CLUBS), Rank.SEVEN, 20),
        (Card(Rank.KING, Suit.STARS), Rank.SEVEN, 13),
        (Card(Rank.KING, Suit.STARS), Rank.KING, 20),
        (Card(Rank.QUEEN, Suit.HEARTS), Rank.THREE, 12),
        (Card(Rank.JACK, Suit.HEARTS), Rank.THREE, 11),
        (Card(Rank.TEN, Suit.DIAMONDS), Rank.THREE, 10),
        (Card(Rank.THREE, Suit.SPADES), Rank.FOUR, 3),
    ],
)
def test_card_points(card: Card, round_rank: Rank, expected: int) -> None:
    assert cards.card_points(card, round_rank) == expected


def test_wild_cards_follow_the_round() -> None:
    seven = Card(Rank.SEVEN, Suit.CLUBS)

    assert cards.is_wild(Card.joker(), Rank.THREE)
    assert cards.is_wild(seven, Rank.SEVEN)
    assert not cards.is_wild(seven, Rank.EIGHT)


def test_run_ranks_exclude_the_joker() -> None:
    ordered = Rank.ordered()

    assert ordered[0] is Rank.THREE
    assert ordered[-1] is Rank.KING
    assert len(ordered) == 11
    assert Rank.JOKER.order == -1
    assert Rank.TEN.order == 7


@pytest.mark.parametrize(
    ("round_number", "expected_rank", "hand_size"),
    [
        (1, Rank.THREE, 3),
        (6, Rank.EIGHT, 8),
        (11, Rank.KING, 13),
    ],
)
def test_round_numbers_map_to_wild_ranks(round_number: int, expected_rank: Rank, hand_size: int) -> None:
    round_rank = cards.round_for_number(round_number)

    assert round_rank is expected_rank
    assert cards.cards_per_round(round_rank) == hand_size


@pytest.mark.parametrize("round_number", [0, 12])
def test_round_number_out_of_range(round_number: int) -> None:
    with pytest.raises(ValueError):
        cards.round_for_number(round_number)


def test_full_deck_holds_two_copies_and_six_jokers() -> None:
    deck = cards.full_deck()
    counts = Counter(deck)

    assert len(deck) == 116
    assert counts[Card.joker()] == 6
    assert all(count == 2 for card, count in counts.items() if not card.is_joker)


def test_deal_hand_is_reproducible() -> None:
    first = cards.deal_hand(Rank.NINE, np.random.default_rng(42))
    second = cards.deal_hand(Rank.NINE, np.random.default_rng(42))

    assert first == second
    assert len(first) == 9
    assert len(cards.deal_hand(Rank.NINE, np.random.default_rng(42), extra=1)) == 10


def test_hand_points_sums_card_values() -> None:
    hand = [Card(Rank.FIVE, Suit.HEARTS), Card.joker(), Card(Rank.KING, Suit.CLUBS)]

    assert cards.hand_points(hand, Rank.THREE) == 5 + 50 + 13
    assert cards.hand_points([], Rank.THREE) == 0
