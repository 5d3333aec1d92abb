"""Card abstractions and helpers for Five Crowns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, Sequence

import numpy as np

__all__ = [
    "Suit",
    "Rank",
    "Card",
    "RUN_RANKS",
    "JOKER_POINTS",
    "WILD_POINTS",
    "DECK_COPIES",
    "JOKERS_PER_DECK",
    "is_wild",
    "card_points",
    "hand_points",
    "round_for_number",
    "cards_per_round",
    "full_deck",
    "deal_hand",
]


class Suit(str, Enum):
    """Enumeration of the five suits in a Five Crowns deck."""

    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    STARS = "T"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS: Final[dict[Suit, str]] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.STARS: "★",
}


class Rank(str, Enum):
    """Enumeration of ranks; every rank except the Joker doubles as a round."""

    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    JOKER = "JK"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return the run ranks in order, lowest first (no wraparound)."""

        return RUN_RANKS

    @property
    def order(self) -> int:
        """Return the position of the rank in a run, or ``-1`` for the Joker."""

        return _RANK_ORDER.get(self, -1)


RUN_RANKS: Final[tuple[Rank, ...]] = tuple(rank for rank in Rank if rank is not Rank.JOKER)
_RANK_ORDER: Final[dict[Rank, int]] = {rank: idx for idx, rank in enumerate(RUN_RANKS)}
_FACE_POINTS: Final[dict[Rank, int]] = {Rank.JACK: 11, Rank.QUEEN: 12, Rank.KING: 13}

JOKER_POINTS: Final[int] = 50
WILD_POINTS: Final[int] = 20
DECK_COPIES: Final[int] = 2
JOKERS_PER_DECK: Final[int] = 6


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a card face.

    Two cards with the same face compare equal; the engine tells physical
    copies apart by their slot in the hand, never by the value itself.
    """

    rank: Rank
    suit: Suit | None = None

    @classmethod
    def joker(cls) -> "Card":
        return cls(Rank.JOKER, None)

    @property
    def is_joker(self) -> bool:
        """Return ``True`` when the card represents a Joker."""

        return self.rank is Rank.JOKER

    @property
    def code(self) -> str:
        if self.is_joker or self.suit is None:
            return Rank.JOKER.value
        return f"{self.rank.value}{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.is_joker or self.suit is None:
            return "🃏"
        return f"{self.rank.value}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def is_wild(card: Card, round_rank: Rank) -> bool:
    """Return ``True`` if ``card`` is wild while ``round_rank`` is the round."""

    return card.rank is Rank.JOKER or card.rank == round_rank


def card_points(card: Card, round_rank: Rank) -> int:
    """Return the penalty value of ``card`` if it is left unmelded."""

    if card.rank is Rank.JOKER:
        return JOKER_POINTS
    if card.rank == round_rank:
        return WILD_POINTS
    face = _FACE_POINTS.get(card.rank)
    if face is not None:
        return face
    return int(card.rank.value)


def hand_points(cards: Iterable[Card], round_rank: Rank) -> int:
    """Return the total point value of ``cards`` for ``round_rank``."""

    return sum(card_points(card, round_rank) for card in cards)


def round_for_number(round_number: int) -> Rank:
    """Return the wild rank of the 1-based ``round_number`` (1 -> ``3``, 11 -> ``K``)."""

    if not 1 <= round_number <= len(RUN_RANKS):
        raise ValueError(f"round number must be between 1 and {len(RUN_RANKS)}")
    return RUN_RANKS[round_number - 1]


def cards_per_round(round_rank: Rank) -> int:
    """Return the hand size dealt when ``round_rank`` is wild."""

    if round_rank is Rank.JOKER:
        raise ValueError("the Joker is not a round")
    return round_rank.order + 3


def full_deck() -> list[Card]:
    """Return a deterministic ordering of all 116 cards."""

    cards: list[Card] = []
    for _ in range(DECK_COPIES):
        for suit in Suit:
            for rank in RUN_RANKS:
                cards.append(Card(rank, suit))
    cards.extend(Card.joker() for _ in range(JOKERS_PER_DECK))
    return cards


def deal_hand(
    round_rank: Rank,
    rng: np.random.Generator,
    deck: Sequence[Card] | None = None,
    *,
    extra: int = 0,
) -> list[Card]:
    """Deal a random hand for ``round_rank`` from a freshly shuffled ``deck``.

    ``extra`` adds cards beyond the round's hand size, e.g. one for the draw.
    """

    source = list(deck) if deck is not None else full_deck()
    size = cards_per_round(round_rank) + extra
    if size > len(source):
        raise ValueError("deck is too small for the requested hand")
    order = rng.permutation(len(source))[:size]
    return [source[int(idx)] for idx in order]
