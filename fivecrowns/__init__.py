"""Top-level package for the Five Crowns meld engine."""

from . import cards, draw, encoding, evaluation, melds, rules

__all__ = [
    "cards",
    "draw",
    "encoding",
    "evaluation",
    "melds",
    "rules",
]
