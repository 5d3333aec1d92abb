from __future__ import annotations

import pytest

from fivecrowns.benchmark import run_benchmark
from fivecrowns.cards import Rank


def test_benchmark_smoke() -> None:
    report = run_benchmark(5, Rank.THREE, seed=7)

    assert report.hands == 5
    assert report.hand_size == 3
    assert 0.0 <= report.mean_melded_cards <= 4.0
    assert report.mean_remaining_points >= 0.0
    assert 0.0 <= report.go_out_rate <= 1.0


def test_benchmark_is_reproducible_for_a_seed() -> None:
    assert run_benchmark(4, Rank.FIVE, seed=11) == run_benchmark(4, Rank.FIVE, seed=11)


def test_benchmark_rejects_non_positive_hand_counts() -> None:
    with pytest.raises(ValueError):
        run_benchmark(0, Rank.THREE)
