from __future__ import annotations

import pytest

from fivecrowns.cards import Card, Rank, Suit
from fivecrowns.encoding import decode_hand
from fivecrowns.melds import Meld, MeldKind, display_order, find_books, find_melds, find_runs


def _hand(codes: str) -> list[Card]:
    return decode_hand(codes.split())


def _slot_sets(melds: list[Meld]) -> list[frozenset[int]]:
    return [frozenset(meld.slots) for meld in melds]


def test_duplicate_cards_form_a_single_book() -> None:
    hand = _hand("3C 3C 3C")

    melds = find_melds(hand, Rank.SEVEN)

    assert len(melds) == 1
    assert melds[0].kind is MeldKind.BOOK
    assert sorted(melds[0].slots) == [0, 1, 2]


def test_runs_do_not_wrap_from_king_to_three() -> None:
    hand = _hand("QS KS 3S")

    assert find_runs(hand, Rank.FIVE) == []
    assert find_melds(hand, Rank.FIVE) == []


def test_wild_fills_a_gap_in_a_run() -> None:
    hand = _hand("5H 7H 6C")

    melds = find_melds(hand, Rank.SIX)

    assert len(melds) == 1
    run = melds[0]
    assert run.kind is MeldKind.RUN
    assert run.cards == tuple(_hand("5H 6C 7H"))
    assert run.suit is Suit.HEARTS
    assert run.represented_ranks() == (Rank.FIVE, Rank.SIX, Rank.SEVEN)


def test_duplicate_rank_in_a_run_branches_into_both_copies() -> None:
    hand = _hand("4H 5H 5H 6H")

    runs = find_runs(hand, Rank.NINE)

    assert _slot_sets(runs) == [frozenset({0, 1, 3}), frozenset({0, 2, 3})]
    assert find_books(hand, Rank.NINE) == []


def test_pair_at_king_only_extends_downward() -> None:
    hand = _hand("QS KS JK")

    runs = find_runs(hand, Rank.FOUR)

    assert len(runs) == 1
    assert runs[0].cards == (Card.joker(), *_hand("QS KS"))
    assert runs[0].represented_ranks() == (Rank.JACK, Rank.QUEEN, Rank.KING)


def test_run_extension_respects_the_effective_span() -> None:
    hand = _hand("JH QH JK JK")

    runs = find_runs(hand, Rank.THREE)
    spans = {run.represented_ranks() for run in runs}

    assert spans == {
        (Rank.JACK, Rank.QUEEN, Rank.KING),
        (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING),
    }


def test_books_use_each_possible_number_of_wilds() -> None:
    hand = _hand("7C 7D JK JK")

    books = find_books(hand, Rank.THREE)

    assert _slot_sets(books) == [frozenset({0, 1, 2}), frozenset({0, 1, 2, 3})]


def test_round_rank_cards_act_as_wilds_in_books() -> None:
    hand = _hand("9C 9D 5S")

    books = find_books(hand, Rank.FIVE)

    assert len(books) == 1
    assert books[0].cards == tuple(_hand("9C 9D 5S"))


def test_all_wild_hand_forms_a_book_and_a_run() -> None:
    hand = _hand("JK JK JK")

    melds = find_melds(hand, Rank.FIVE)

    assert [meld.kind for meld in melds] == [MeldKind.BOOK, MeldKind.RUN]
    run = melds[1]
    assert run.suit is None
    assert run.represented_ranks() is None


def test_longest_run_spans_three_to_king() -> None:
    # 3S is wild in round 3 and stands in for itself at the bottom of the run.
    hand = _hand("3S 4S 5S 6S 7S 8S 9S 10S JS QS KS")

    runs = find_runs(hand, Rank.THREE)
    longest = max(runs, key=len)

    assert len(longest) == 11
    assert longest.represented_ranks() == Rank.ordered()
    assert all(len(run) <= 11 for run in runs)


def test_find_melds_is_idempotent() -> None:
    hand = _hand("5H 6H 7H 7C 7D JK 9S 9S")

    first = find_melds(hand, Rank.TEN)
    second = find_melds(hand, Rank.TEN)

    assert first == second


@pytest.mark.parametrize(
    "codes",
    [
        "5H 6H 7H 7C 7D JK 9S 9S",
        "4D 4D 5D 6D 8D QT QT KT 3C",
        "JK JK 8H 10H QC",
    ],
)
def test_melds_reference_real_distinct_hand_slots(codes: str) -> None:
    hand = _hand(codes)

    for meld in find_melds(hand, Rank.EIGHT):
        assert len(meld.slots) == len(set(meld.slots)) >= 3
        assert meld.cards == tuple(hand[slot] for slot in meld.slots)


@pytest.mark.parametrize("hand", [[], _hand("5H 6H"), "5H 6H 7H", None, [1, 2, 3]])
def test_short_or_malformed_hands_have_no_melds(hand: object) -> None:
    assert find_melds(hand, Rank.THREE) == []  # type: ignore[arg-type]


def test_display_order_places_wilds_in_gaps_then_trailing() -> None:
    gap = Meld(kind=MeldKind.RUN, cards=tuple(_hand("7H JK 5H")))
    trailing = Meld(kind=MeldKind.RUN, cards=tuple(_hand("JK 5H 6H")))
    book = Meld(kind=MeldKind.BOOK, cards=tuple(_hand("JK 5H 5C")))

    assert display_order(gap, Rank.THREE) == tuple(_hand("5H JK 7H"))
    assert display_order(trailing, Rank.THREE) == tuple(_hand("5H 6H JK"))
    assert display_order(book, Rank.THREE) == book.cards
