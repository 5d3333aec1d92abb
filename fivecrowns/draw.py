"""Take-the-discard versus draw-blind recommendations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from .cards import Card, Rank, card_points, hand_points, is_wild
from .melds import Meld, coerce_hand, find_melds
from .rules import select_best

__all__ = [
    "DrawDecision",
    "DrawThresholds",
    "DEFAULT_DRAW_THRESHOLDS",
    "DrawRecommendation",
    "remaining_points",
    "recommend_draw",
]

logger = logging.getLogger(__name__)


class DrawDecision(str, Enum):
    """Possible answers to "should I take the top discard?"."""

    TAKE = "take"
    SKIP = "skip"
    MAYBE = "maybe"


@dataclass(frozen=True, slots=True)
class DrawThresholds:
    """Point cut-offs used when a discard does not obviously help."""

    safe_points: int = 5
    low_points: int = 3
    high_points: int = 10


DEFAULT_DRAW_THRESHOLDS: Final[DrawThresholds] = DrawThresholds()


@dataclass(frozen=True, slots=True)
class DrawRecommendation:
    """Recommendation plus the figures it was based on."""

    decision: DrawDecision
    reasoning: tuple[str, ...]
    remaining_before: int
    remaining_after: int

    @property
    def improvement(self) -> int:
        return self.remaining_before - self.remaining_after


def remaining_points(hand: Sequence[Card], round_rank: Rank, melds: Sequence[Meld]) -> int:
    """Return the points left unmelded after selecting from ``melds``."""

    return hand_points(select_best(hand, melds).leftover, round_rank)


def _melded_points(hand: Sequence[Card], round_rank: Rank, melds: Sequence[Meld]) -> int:
    return hand_points(hand, round_rank) - remaining_points(hand, round_rank, melds)


def recommend_draw(
    candidate: Card,
    hand: Sequence[Card],
    round_rank: Rank,
    current_melds: Sequence[Meld] | None = None,
    *,
    thresholds: DrawThresholds = DEFAULT_DRAW_THRESHOLDS,
) -> DrawRecommendation:
    """Decide whether taking ``candidate`` from the discard pile is worthwhile."""

    cards = list(coerce_hand(hand))
    if current_melds is None:
        current_melds = find_melds(cards, round_rank)
    hypothetical = cards + [candidate]
    hypothetical_melds = find_melds(hypothetical, round_rank)

    before = remaining_points(cards, round_rank, current_melds)
    after = remaining_points(hypothetical, round_rank, hypothetical_melds)
    improvement = before - after
    points = card_points(candidate, round_rank)
    helps_melds = len(hypothetical_melds) > len(current_melds) or _melded_points(
        hypothetical, round_rank, hypothetical_melds
    ) > _melded_points(cards, round_rank, current_melds)

    reasoning: list[str] = []
    if is_wild(candidate, round_rank):
        decision = DrawDecision.TAKE
        reasoning.append("Wild cards are extremely valuable (can be used as any card)")
        if candidate.is_joker:
            reasoning.append(f"Jokers are worth {points} points if not used in melds")
        else:
            reasoning.append(f"Wild {candidate.rank.value}s are worth {points} points if not used in melds")
    elif helps_melds and improvement > 0:
        decision = DrawDecision.TAKE
        reasoning.append(f"This card helps form melds, reducing your remaining points by {improvement}")
        reasoning.append(f"Would reduce remaining points from {before} to {after}")
    elif helps_melds:
        reasoning.append("This card can help form melds")
        if points <= thresholds.safe_points:
            decision = DrawDecision.TAKE
            reasoning.append(f"Low point value ({points} points) makes it relatively safe")
        else:
            decision = DrawDecision.MAYBE
            reasoning.append(f"However, it is worth {points} points if not used in melds")
    elif points <= thresholds.low_points:
        decision = DrawDecision.MAYBE
        reasoning.append(f"Low point value ({points} points) - low risk if it does not help")
        reasoning.append("Consider taking if you need more cards of this rank or suit")
    elif points >= thresholds.high_points:
        decision = DrawDecision.SKIP
        reasoning.append(f"High point value ({points} points) - risky if it does not help form melds")
        reasoning.append("Better to draw from deck unless you are certain it helps")
    else:
        decision = DrawDecision.MAYBE
        reasoning.append(f"Medium point value ({points} points)")
        reasoning.append("Only take if you can use it in a meld")

    logger.debug("draw %s: %s (%d -> %d)", candidate.code, decision.value, before, after)
    return DrawRecommendation(
        decision=decision,
        reasoning=tuple(reasoning),
        remaining_before=before,
        remaining_after=after,
    )
