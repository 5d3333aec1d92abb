from __future__ import annotations

import pytest

from fivecrowns.cards import Card, Rank
from fivecrowns.draw import DrawDecision, DrawThresholds, recommend_draw, remaining_points
from fivecrowns.encoding import decode_card, decode_hand
from fivecrowns.melds import find_melds


def _hand(codes: str) -> list[Card]:
    return decode_hand(codes.split())


@pytest.mark.parametrize(("candidate", "round_rank"), [("JK", Rank.THREE), ("7S", Rank.SEVEN)])
def test_wild_cards_are_always_taken(candidate: str, round_rank: Rank) -> None:
    recommendation = recommend_draw(decode_card(candidate), _hand("4D 9S KH"), round_rank)

    assert recommendation.decision is DrawDecision.TAKE
    assert recommendation.reasoning[0].startswith("Wild cards are extremely valuable")


def test_card_completing_a_run_is_taken() -> None:
    recommendation = recommend_draw(decode_card("7H"), _hand("5H 6H KS"), Rank.THREE)

    assert recommendation.decision is DrawDecision.TAKE
    assert recommendation.remaining_before == 24
    assert recommendation.remaining_after == 13
    assert recommendation.improvement == 11


def test_expensive_useless_card_is_skipped() -> None:
    recommendation = recommend_draw(decode_card("KD"), _hand("5H 6H 9C"), Rank.THREE)

    assert recommendation.decision is DrawDecision.SKIP
    assert recommendation.remaining_before == 20
    assert recommendation.remaining_after == 33


def test_cheap_useless_card_is_a_maybe() -> None:
    recommendation = recommend_draw(decode_card("3C"), _hand("5H 9S KD"), Rank.SEVEN)

    assert recommendation.decision is DrawDecision.MAYBE
    assert recommendation.reasoning[0].startswith("Low point value (3 points)")


def test_medium_value_card_is_a_maybe() -> None:
    recommendation = recommend_draw(decode_card("7C"), _hand("5H 9S KD"), Rank.THREE)

    assert recommendation.decision is DrawDecision.MAYBE
    assert recommendation.reasoning[0] == "Medium point value (7 points)"


def test_helpful_card_without_improvement_depends_on_its_value() -> None:
    hand = _hand("4H 5H 6H 9C")

    pricey = recommend_draw(decode_card("7H"), hand, Rank.THREE)
    cheap = recommend_draw(decode_card("3H"), hand, Rank.SEVEN)

    assert pricey.decision is DrawDecision.MAYBE
    assert pricey.improvement == 0
    assert pricey.reasoning[0] == "This card can help form melds"
    assert cheap.decision is DrawDecision.TAKE


def test_custom_thresholds_change_the_cut_off() -> None:
    recommendation = recommend_draw(
        decode_card("KD"),
        _hand("5H 6H 9C"),
        Rank.THREE,
        thresholds=DrawThresholds(high_points=14),
    )

    assert recommendation.decision is DrawDecision.MAYBE


def test_remaining_points_uses_selected_melds() -> None:
    hand = _hand("4D 5D 6D 9S")

    assert remaining_points(hand, Rank.THREE, find_melds(hand, Rank.THREE)) == 9
    assert remaining_points(hand, Rank.THREE, []) == 24
