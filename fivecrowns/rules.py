"""Meld selection and going-out rules for Five Crowns."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import encoding
from .cards import Card, Rank, hand_points
from .melds import MIN_MELD_SIZE, Meld, coerce_hand, find_melds

__all__ = [
    "Selection",
    "GoOutCheck",
    "GoOutResult",
    "HandSummary",
    "select_best",
    "can_all_cards_form_melds",
    "can_go_out_with_hand",
    "can_go_out_after_discard",
    "find_go_out_discard",
    "best_meld_combination",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """Non-overlapping melds chosen from a hand and the cards they leave."""

    melds: tuple[Meld, ...]
    used_mask: int
    leftover: tuple[Card, ...]

    @property
    def used_count(self) -> int:
        return encoding.count_slots(self.used_mask)


@dataclass(frozen=True, slots=True)
class GoOutCheck:
    """Outcome of checking whether every card of a hand can be melded."""

    success: bool
    melds: tuple[Meld, ...]
    message: str = ""


@dataclass(frozen=True, slots=True)
class GoOutResult:
    """The first discard, in hand order, that lets the player go out."""

    index: int
    card: Card
    melds: tuple[Meld, ...]


@dataclass(frozen=True, slots=True)
class HandSummary:
    """Best meld arrangement for a hand as shown to the player."""

    melds: tuple[Meld, ...]
    leftover: tuple[Card, ...]
    can_go_out: bool
    remaining_points: int


def _match_meld(cards: Sequence[Card], meld: Meld, available: int) -> int | None:
    """Return the slots ``meld`` would occupy among ``available``, or ``None``."""

    taken = 0
    for position, card in enumerate(meld.cards):
        free = available & ~taken
        slot = meld.slots[position] if position < len(meld.slots) else -1
        if 0 <= slot < len(cards) and cards[slot] == card and encoding.has_slot(free, slot):
            taken = encoding.add_slot(taken, slot)
            continue
        match = next((candidate for candidate in encoding.iter_slots(free) if cards[candidate] == card), None)
        if match is None:
            return None
        taken = encoding.add_slot(taken, match)
    return taken


def select_best(hand: Sequence[Card], melds: Iterable[Meld]) -> Selection:
    """Greedily choose non-overlapping melds, largest first.

    Each meld is accepted only if all of its cards can be matched to hand
    cards no earlier meld consumed; otherwise it is skipped. Ties keep the
    input order. The result is not guaranteed to cover the most cards.
    """

    cards = coerce_hand(hand)
    candidates = [meld for meld in melds if isinstance(meld, Meld) and meld.cards]
    available = encoding.full_mask(len(cards))
    chosen: list[Meld] = []

    for meld in sorted(candidates, key=lambda candidate: len(candidate.cards), reverse=True):
        taken = _match_meld(cards, meld, available)
        if taken is None:
            continue
        available &= ~taken
        chosen.append(meld)

    used_mask = encoding.full_mask(len(cards)) & ~available
    leftover = tuple(card for slot, card in enumerate(cards) if not encoding.has_slot(used_mask, slot))
    return Selection(melds=tuple(chosen), used_mask=used_mask, leftover=leftover)


def can_all_cards_form_melds(hand: Sequence[Card], melds: Sequence[Meld]) -> bool:
    """Return ``True`` when the selected melds cover every card of ``hand``."""

    cards = coerce_hand(hand)
    if not cards or not melds:
        return False
    return select_best(cards, melds).used_count == len(cards)


def can_go_out_with_hand(
    hand: Sequence[Card],
    round_rank: Rank,
    melds: Sequence[Meld] | None = None,
) -> GoOutCheck:
    """Check whether ``hand`` (already without its discard) is fully melded."""

    cards = coerce_hand(hand)
    if not cards:
        return GoOutCheck(success=False, melds=(), message="Hand is empty")
    if melds is None:
        melds = find_melds(cards, round_rank)
    if not melds:
        return GoOutCheck(success=False, melds=(), message="No valid melds found")

    selection = select_best(cards, melds)
    if selection.used_count == len(cards):
        return GoOutCheck(success=True, melds=selection.melds)
    return GoOutCheck(
        success=False,
        melds=(),
        message=(
            f"Only {selection.used_count} of {len(cards)} cards can be used in melds. "
            f"All {len(cards)} cards must be used to go out."
        ),
    )


def _without(cards: Sequence[Card], index: int) -> list[Card]:
    return [card for slot, card in enumerate(cards) if slot != index]


def can_go_out_after_discard(hand: Sequence[Card], round_rank: Rank, index: int) -> bool:
    """Return ``True`` if discarding ``hand[index]`` leaves a fully melded hand."""

    cards = coerce_hand(hand)
    if not 0 <= index < len(cards):
        return False
    remaining = _without(cards, index)
    if len(remaining) < MIN_MELD_SIZE:
        return False
    return can_go_out_with_hand(remaining, round_rank).success


def find_go_out_discard(hand: Sequence[Card], round_rank: Rank) -> GoOutResult | None:
    """Return the first discard that lets the player go out, if any."""

    cards = coerce_hand(hand)
    for index, card in enumerate(cards):
        remaining = _without(cards, index)
        if len(remaining) < MIN_MELD_SIZE:
            continue
        check = can_go_out_with_hand(remaining, round_rank)
        if check.success:
            logger.debug("discarding %s at slot %d goes out", card.code, index)
            return GoOutResult(index=index, card=card, melds=check.melds)
    return None


def best_meld_combination(hand: Sequence[Card], round_rank: Rank) -> HandSummary:
    """Return the best non-overlapping melds for ``hand`` and what is left over."""

    cards = coerce_hand(hand)
    if not cards:
        return HandSummary(melds=(), leftover=(), can_go_out=False, remaining_points=0)

    melds = find_melds(cards, round_rank)
    if not melds:
        return HandSummary(
            melds=(),
            leftover=cards,
            can_go_out=False,
            remaining_points=hand_points(cards, round_rank),
        )

    selection = select_best(cards, melds)
    return HandSummary(
        melds=selection.melds,
        leftover=selection.leftover,
        can_go_out=len(selection.leftover) <= 1,
        remaining_points=hand_points(selection.leftover, round_rank),
    )
