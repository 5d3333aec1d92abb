"""Benchmark harness measuring how well random hands meld."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .cards import Rank, cards_per_round, deal_hand, full_deck
from .rules import best_meld_combination, find_go_out_discard

__all__ = ["BenchmarkReport", "run_benchmark"]


@dataclass(frozen=True, slots=True)
class BenchmarkReport:
    """Aggregate statistics over a batch of dealt hands."""

    round_rank: Rank
    hands: int
    hand_size: int
    mean_melded_cards: float
    mean_remaining_points: float
    p90_remaining_points: float
    go_out_rate: float


def run_benchmark(hands: int, round_rank: Rank, *, seed: int = 123) -> BenchmarkReport:
    """Deal ``hands`` random hands for ``round_rank`` and summarise the engine's results.

    Each hand is dealt one card larger than the round's hand size, matching
    the moment after a draw when the player decides what to discard.
    """

    if hands <= 0:
        raise ValueError("hands must be positive")

    rng = np.random.default_rng(seed)
    deck = full_deck()
    hand_size = cards_per_round(round_rank)
    melded = np.zeros(hands, dtype=np.int64)
    remaining = np.zeros(hands, dtype=np.int64)
    went_out = np.zeros(hands, dtype=bool)

    for idx in range(hands):
        hand = deal_hand(round_rank, rng, deck, extra=1)
        summary = best_meld_combination(hand, round_rank)
        melded[idx] = len(hand) - len(summary.leftover)
        remaining[idx] = summary.remaining_points
        went_out[idx] = find_go_out_discard(hand, round_rank) is not None

    return BenchmarkReport(
        round_rank=round_rank,
        hands=hands,
        hand_size=hand_size,
        mean_melded_cards=float(melded.mean()),
        mean_remaining_points=float(remaining.mean()),
        p90_remaining_points=float(np.percentile(remaining, 90)),
        go_out_rate=float(went_out.mean()),
    )
