"""Card code parsing and per-hand slot mask utilities.

A hand is evaluated as an arena of slots: slot ``i`` is the ``i``-th card
instance of the hand for the duration of one engine call. Sets of physical
cards are bit-masks over those slots, so two identical faces held twice
are still two distinct bits.
"""

from __future__ import annotations

from typing import Final, Iterable, Iterator, Sequence

from .cards import Card, Rank, Suit

SUIT_LETTERS: Final[dict[str, Suit]] = {suit.value: suit for suit in Suit}
SUIT_SYMBOLS: Final[dict[str, Suit]] = {suit.symbol: suit for suit in Suit}
RANK_CODES: Final[dict[str, Rank]] = {rank.value: rank for rank in Rank if rank is not Rank.JOKER}
JOKER_CODES: Final[frozenset[str]] = frozenset({"JK", "JOKER", "🃏"})


class InvalidCardCode(ValueError):
    """Raised when a card code cannot be parsed."""


def decode_card(code: str) -> Card:
    """Parse ``code`` such as ``10H``, ``Q★`` or ``JK`` into a :class:`Card`."""

    text = code.strip().upper()
    if not text:
        raise InvalidCardCode("empty card code")
    if text in JOKER_CODES:
        return Card.joker()
    suit_token = text[-1]
    rank_token = text[:-1]
    suit = SUIT_LETTERS.get(suit_token) or SUIT_SYMBOLS.get(suit_token)
    if suit is None:
        raise InvalidCardCode(f"invalid suit in card code '{code}'")
    rank = RANK_CODES.get(rank_token)
    if rank is None:
        raise InvalidCardCode(f"invalid rank in card code '{code}'")
    return Card(rank, suit)


def encode_card(card: Card) -> str:
    """Return the compact code for ``card``."""

    return card.code


def decode_hand(codes: Iterable[str]) -> list[Card]:
    """Parse every code in ``codes``, preserving order and duplicates."""

    return [decode_card(code) for code in codes]


def decode_round(code: str) -> Rank:
    """Parse a round given by its wild rank (``7``, ``K``)."""

    rank = RANK_CODES.get(code.strip().upper())
    if rank is not None:
        return rank
    raise InvalidCardCode(f"invalid round '{code}'")


def format_cards(cards: Sequence[Card]) -> str:
    return " ".join(card.code for card in cards)


def slot_bit(slot: int) -> int:
    """Return the bit representing ``slot``."""

    if slot < 0:
        raise ValueError(f"slot {slot} out of range")
    return 1 << slot


def mask_from_slots(slots: Iterable[int]) -> int:
    """Return a bit-mask representing the provided hand slots."""

    mask = 0
    for slot in slots:
        mask |= slot_bit(slot)
    return mask


def full_mask(hand_size: int) -> int:
    """Return the mask covering every slot of a hand with ``hand_size`` cards."""

    return (1 << hand_size) - 1


def has_slot(mask: int, slot: int) -> bool:
    """Return ``True`` if ``mask`` already includes ``slot``."""

    if slot < 0:
        return False
    return (mask >> slot) & 1 == 1


def add_slot(mask: int, slot: int) -> int:
    return mask | slot_bit(slot)


def iter_slots(mask: int) -> Iterator[int]:
    """Yield all slots present in ``mask`` in ascending order."""

    slot = 0
    while mask:
        if mask & 1:
            yield slot
        mask >>= 1
        slot += 1


def slots_from_mask(mask: int) -> list[int]:
    return list(iter_slots(mask))


def count_slots(mask: int) -> int:
    return bin(mask).count("1")
