"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from ..cards import Card, Rank, Suit, is_wild

_SUIT_COLOURS = {
    Suit.CLUBS: "green",
    Suit.DIAMONDS: "blue",
    Suit.HEARTS: "red",
    Suit.SPADES: "white",
    Suit.STARS: "yellow",
}


def format_card(card: Card, round_rank: Rank | None = None) -> str:
    """Return a Rich-rendered label for ``card``; wild cards are highlighted."""

    if card.is_joker or card.suit is None:
        return "[bold magenta]🃏[/bold magenta]"
    colour = _SUIT_COLOURS.get(card.suit, "white")
    label = card.label()
    if round_rank is not None and is_wild(card, round_rank):
        return f"[bold {colour} reverse]{label}[/bold {colour} reverse]"
    return f"[{colour}]{label}[/{colour}]"


def format_cards(cards: Iterable[Card], round_rank: Rank | None = None) -> str:
    rendered = [format_card(card, round_rank) for card in cards]
    return " ".join(rendered) if rendered else "—"
