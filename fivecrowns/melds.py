"""Meld enumeration for Five Crowns hands.

Every meld produced here references physical hand cards by slot, so a
hand holding the same face twice yields melds that can tell the two
copies apart. Candidates are de-duplicated by their slot mask as soon as
they are generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Sequence

from . import encoding
from .cards import RUN_RANKS, Card, Rank, Suit, is_wild

__all__ = [
    "MIN_MELD_SIZE",
    "MAX_RUN_LENGTH",
    "MeldKind",
    "Meld",
    "coerce_hand",
    "find_melds",
    "find_books",
    "find_runs",
    "display_order",
]

logger = logging.getLogger(__name__)

MIN_MELD_SIZE: Final[int] = 3
MAX_RUN_LENGTH: Final[int] = len(RUN_RANKS)
_LAST_ORDER: Final[int] = MAX_RUN_LENGTH - 1


class MeldKind(str, Enum):
    """The two meld shapes allowed in Five Crowns."""

    BOOK = "book"
    RUN = "run"


@dataclass(frozen=True, slots=True)
class Meld:
    """A book or run built from specific hand cards.

    ``slots`` runs parallel to ``cards`` and names the hand position of each
    card. Melds built outside the engine may leave it empty, in which case
    cards are matched against the hand by face. For runs, ``start`` is the
    rank order of the first position and ``suit`` the suit of its natural
    cards; both are ``None`` for an all-wild run.
    """

    kind: MeldKind
    cards: tuple[Card, ...]
    slots: tuple[int, ...] = ()
    start: int | None = None
    suit: Suit | None = None

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def mask(self) -> int:
        return encoding.mask_from_slots(self.slots)

    def represented_ranks(self) -> tuple[Rank, ...] | None:
        """Return the rank each run position stands for, if the span is known."""

        if self.kind is not MeldKind.RUN or self.start is None:
            return None
        return RUN_RANKS[self.start : self.start + len(self.cards)]


@dataclass(slots=True)
class _MeldCollector:
    hand: Sequence[Card]
    kind: MeldKind
    melds: list[Meld] = field(default_factory=list)
    seen: set[int] = field(default_factory=set)

    def add(self, slots: Sequence[int], *, start: int | None = None, suit: Suit | None = None) -> Meld | None:
        if len(slots) < MIN_MELD_SIZE or len(set(slots)) != len(slots):
            return None
        mask = encoding.mask_from_slots(slots)
        if mask in self.seen:
            return None
        self.seen.add(mask)
        meld = Meld(
            kind=self.kind,
            cards=tuple(self.hand[slot] for slot in slots),
            slots=tuple(slots),
            start=start,
            suit=suit,
        )
        self.melds.append(meld)
        return meld


def coerce_hand(hand: Any) -> tuple[Card, ...]:
    """Return ``hand`` as a tuple of cards, or an empty tuple if it is malformed."""

    if isinstance(hand, (str, bytes)) or not isinstance(hand, Sequence):
        return ()
    if not all(isinstance(card, Card) for card in hand):
        return ()
    return tuple(hand)


def _wild_slots(cards: Sequence[Card], round_rank: Rank) -> list[int]:
    return [slot for slot, card in enumerate(cards) if is_wild(card, round_rank)]


def find_books(cards: Sequence[Card], round_rank: Rank) -> list[Meld]:
    """Return every book in ``cards``, with and without wild cards."""

    wild_slots = _wild_slots(cards, round_rank)
    groups: dict[Rank, list[int]] = {}
    for slot, card in enumerate(cards):
        if not is_wild(card, round_rank):
            groups.setdefault(card.rank, []).append(slot)

    collector = _MeldCollector(cards, MeldKind.BOOK)
    for group in groups.values():
        for wild_count in range(len(wild_slots) + 1):
            if len(group) + wild_count >= MIN_MELD_SIZE:
                collector.add(group + wild_slots[:wild_count])

    if len(wild_slots) >= MIN_MELD_SIZE:
        for size in range(MIN_MELD_SIZE, len(wild_slots) + 1):
            collector.add(wild_slots[:size])
    return collector.melds


def _runs_in_suit(
    cards: Sequence[Card],
    suit: Suit,
    wild_slots: Sequence[int],
    round_rank: Rank,
    collector: _MeldCollector,
) -> None:
    naturals = sorted(
        (
            slot
            for slot, card in enumerate(cards)
            if card.suit is suit and not is_wild(card, round_rank)
        ),
        key=lambda slot: cards[slot].rank.order,
    )
    if not naturals:
        return

    by_order: dict[int, list[int]] = {}
    for slot in naturals:
        by_order.setdefault(cards[slot].rank.order, []).append(slot)

    found: list[Meld] = []

    def add(slots: Sequence[int], start: int) -> None:
        meld = collector.add(slots, start=start, suit=suit)
        if meld is not None:
            found.append(meld)

    # Consecutive naturals only; duplicates of a rank branch into separate runs.
    def extend_chain(chain: list[int], order: int) -> None:
        if len(chain) >= MIN_MELD_SIZE:
            add(chain, order - len(chain) + 1)
        for slot in by_order.get(order + 1, ()):
            extend_chain(chain + [slot], order + 1)

    for slot in naturals:
        extend_chain([slot], cards[slot].rank.order)

    if not wild_slots:
        return

    # Fill the ranks missing between two naturals with wild cards.
    for i, low_slot in enumerate(naturals):
        low = cards[low_slot].rank.order
        for high_slot in naturals[i + 1 :]:
            high = cards[high_slot].rank.order
            if high <= low or high - low + 1 < MIN_MELD_SIZE:
                continue
            missing = sum(1 for order in range(low + 1, high) if order not in by_order)
            if missing > len(wild_slots):
                continue
            wilds = iter(wild_slots)
            slots = [low_slot]
            for order in range(low + 1, high):
                between = by_order.get(order)
                slots.append(between[0] if between else next(wilds))
            slots.append(high_slot)
            add(slots, low)

    # One wild on either side of a consecutive pair.
    wild = wild_slots[0]
    for first in naturals:
        order = cards[first].rank.order
        for second in by_order.get(order + 1, ()):
            if order + 1 < _LAST_ORDER:
                add([first, second, wild], order)
            if order > 0:
                add([wild, first, second], order - 1)

    # One more wild on either side of every run found so far.
    for run in list(found):
        if run.start is None:
            continue
        spare = next((slot for slot in wild_slots if slot not in run.slots), None)
        if spare is None:
            continue
        end = run.start + len(run) - 1
        if run.start > 0:
            add([spare, *run.slots], run.start - 1)
        if end < _LAST_ORDER:
            add([*run.slots, spare], run.start)


def find_runs(cards: Sequence[Card], round_rank: Rank) -> list[Meld]:
    """Return every run in ``cards``; wild cards may join any suit."""

    wild_slots = _wild_slots(cards, round_rank)
    collector = _MeldCollector(cards, MeldKind.RUN)
    for suit in Suit:
        _runs_in_suit(cards, suit, wild_slots, round_rank, collector)

    if len(wild_slots) >= MIN_MELD_SIZE:
        for size in range(MIN_MELD_SIZE, min(len(wild_slots), MAX_RUN_LENGTH) + 1):
            collector.add(wild_slots[:size])
    return collector.melds


def find_melds(hand: Sequence[Card], round_rank: Rank) -> list[Meld]:
    """Return all books and runs present in ``hand`` for ``round_rank``.

    Hands with fewer than three cards, or that are not a sequence of
    :class:`Card`, produce no melds.
    """

    cards = coerce_hand(hand)
    if len(cards) < MIN_MELD_SIZE:
        return []
    books = find_books(cards, round_rank)
    runs = find_runs(cards, round_rank)
    logger.debug("found %d book(s) and %d run(s) in %d card(s)", len(books), len(runs), len(cards))
    return books + runs


def display_order(meld: Meld, round_rank: Rank) -> tuple[Card, ...]:
    """Return ``meld``'s cards in the order a player would lay them down.

    Runs list naturals by rank with wild cards filling the gaps and any
    remaining wild cards trailing; books and engine-built runs are already
    in display order.
    """

    if meld.kind is not MeldKind.RUN or meld.start is not None:
        return meld.cards
    naturals = sorted(
        (card for card in meld.cards if not is_wild(card, round_rank)),
        key=lambda card: card.rank.order,
    )
    wilds = [card for card in meld.cards if is_wild(card, round_rank)]
    if not naturals:
        return tuple(wilds)

    ordered: list[Card] = []
    pending = iter(naturals)
    current = next(pending, None)
    for order in range(naturals[0].rank.order, naturals[-1].rank.order + 1):
        if current is not None and current.rank.order == order:
            ordered.append(current)
            current = next(pending, None)
        elif wilds:
            ordered.append(wilds.pop(0))
    if current is not None:
        ordered.append(current)
        ordered.extend(pending)
    ordered.extend(wilds)
    return tuple(ordered)
