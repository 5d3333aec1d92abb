"""Discard heuristics for Five Crowns hands."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .cards import Card, Rank, card_points, is_wild
from .melds import MIN_MELD_SIZE, Meld, coerce_hand, find_melds
from .rules import find_go_out_discard, select_best

__all__ = [
    "DiscardStrategy",
    "DiscardAdvice",
    "unused_slots",
    "advise_discard",
    "suggest_discard",
]

logger = logging.getLogger(__name__)


class DiscardStrategy(str, Enum):
    """Which step of the discard cascade produced a suggestion."""

    GO_OUT = "go_out"
    NO_MELDS = "no_melds"
    ALL_MELDED = "all_melded"
    NOTHING_MELDED = "nothing_melded"
    KEEPS_MELD = "keeps_meld"
    UNUSED_CARD = "unused_card"


@dataclass(frozen=True, slots=True)
class DiscardAdvice:
    """Suggested discard; ``index`` names the exact copy held in the hand."""

    index: int
    card: Card
    strategy: DiscardStrategy


def _highest(cards: Sequence[Card], slots: Sequence[int], round_rank: Rank) -> int:
    return max(slots, key=lambda slot: card_points(cards[slot], round_rank))


def _lowest(cards: Sequence[Card], slots: Sequence[int], round_rank: Rank) -> int:
    return min(slots, key=lambda slot: card_points(cards[slot], round_rank))


def _shed_points(cards: Sequence[Card], slots: Sequence[int], round_rank: Rank, is_final_turn: bool) -> int:
    """Pick among ``slots`` when nothing is worth keeping for melds."""

    if is_final_turn:
        return _highest(cards, slots, round_rank)
    naturals = [slot for slot in slots if not is_wild(cards[slot], round_rank)]
    if naturals:
        return _highest(cards, naturals, round_rank)
    return _lowest(cards, slots, round_rank)


def _prefer_naturals(cards: Sequence[Card], slots: Sequence[int], round_rank: Rank) -> int:
    naturals = [slot for slot in slots if not is_wild(cards[slot], round_rank)]
    if naturals:
        return _highest(cards, naturals, round_rank)
    return _lowest(cards, slots, round_rank)


def unused_slots(hand: Sequence[Card], melds: Sequence[Meld]) -> list[int]:
    """Return the hand slots not covered by the melds selected from ``melds``.

    Coverage is counted per face: if the chosen melds use ``n`` copies of a
    face, the first ``n`` copies held are used and any further copies are not.
    """

    cards = coerce_hand(hand)
    selection = select_best(cards, melds)
    remaining = Counter(card for meld in selection.melds for card in meld.cards)
    unused: list[int] = []
    for slot, card in enumerate(cards):
        if remaining[card] > 0:
            remaining[card] -= 1
        else:
            unused.append(slot)
    return unused


def _keeps_a_meld(cards: Sequence[Card], slot: int, round_rank: Rank) -> bool:
    remaining = [card for index, card in enumerate(cards) if index != slot]
    if len(remaining) < MIN_MELD_SIZE:
        return False
    return bool(find_melds(remaining, round_rank))


def advise_discard(
    hand: Sequence[Card],
    round_rank: Rank,
    melds: Sequence[Meld] | None = None,
    is_final_turn: bool = False,
) -> DiscardAdvice | None:
    """Return the suggested discard for ``hand`` and the rule that chose it.

    Going out always wins. Otherwise wild cards are kept unless it is the
    final turn and nothing melds, in which case the most expensive card goes.
    """

    cards = coerce_hand(hand)
    if not cards:
        return None

    def advice(slot: int, strategy: DiscardStrategy) -> DiscardAdvice:
        logger.debug("suggesting %s at slot %d (%s)", cards[slot].code, slot, strategy.value)
        return DiscardAdvice(index=slot, card=cards[slot], strategy=strategy)

    go_out = find_go_out_discard(cards, round_rank)
    if go_out is not None:
        return advice(go_out.index, DiscardStrategy.GO_OUT)

    if melds is None:
        melds = find_melds(cards, round_rank)
    melds = [meld for meld in melds if isinstance(meld, Meld)]
    every_slot = list(range(len(cards)))
    if not melds:
        return advice(_shed_points(cards, every_slot, round_rank, is_final_turn), DiscardStrategy.NO_MELDS)

    unused = unused_slots(cards, melds)
    if not unused:
        return advice(_lowest(cards, every_slot, round_rank), DiscardStrategy.ALL_MELDED)
    if len(unused) == len(cards):
        return advice(_shed_points(cards, every_slot, round_rank, is_final_turn), DiscardStrategy.NOTHING_MELDED)

    keeps_meld = [slot for slot in unused if _keeps_a_meld(cards, slot, round_rank)]
    if keeps_meld:
        return advice(_prefer_naturals(cards, keeps_meld, round_rank), DiscardStrategy.KEEPS_MELD)

    return advice(_prefer_naturals(cards, unused, round_rank), DiscardStrategy.UNUSED_CARD)


def suggest_discard(
    hand: Sequence[Card],
    round_rank: Rank,
    melds: Sequence[Meld] | None = None,
    is_final_turn: bool = False,
) -> Card | None:
    """Return the card to discard, or ``None`` for an empty hand."""

    advice = advise_discard(hand, round_rank, melds, is_final_turn)
    return advice.card if advice is not None else None
