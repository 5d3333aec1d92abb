"""Typer entry-point wiring for the Five Crowns CLI."""

from __future__ import annotations

import logging
from typing import List

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import benchmark, encoding, evaluation, rules
from ..cards import Card, Rank
from ..draw import recommend_draw
from ..melds import find_melds
from .views import DrawReportView, HandReportView, benchmark_table

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def _parse_round(value: str) -> Rank:
    try:
        return encoding.decode_round(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_cards(codes: List[str]) -> list[Card]:
    try:
        return encoding.decode_hand(codes)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions."),
) -> None:
    """Analyse Five Crowns hands: melds, going out, discards and draws."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def analyze(
    cards: List[str] = typer.Argument(..., help="Card codes such as 5H 10T QS JK."),
    round_code: str = typer.Option(..., "--round", "-r", help="Wild rank of the round (3-10, J, Q, K)."),
    final_turn: bool = typer.Option(False, "--final-turn", help="Another player has already gone out."),
) -> None:
    """Show the best melds for a hand and the suggested discard."""

    round_rank = _parse_round(round_code)
    hand = _parse_cards(cards)
    summary = rules.best_meld_combination(hand, round_rank)
    advice = evaluation.advise_discard(hand, round_rank, find_melds(hand, round_rank), final_turn)
    console.print(HandReportView(hand=hand, round_rank=round_rank, summary=summary, advice=advice).render())


@app.command()
def draw(
    candidate: str = typer.Argument(..., help="Card on top of the discard pile."),
    cards: List[str] = typer.Argument(..., help="Card codes currently held."),
    round_code: str = typer.Option(..., "--round", "-r", help="Wild rank of the round (3-10, J, Q, K)."),
) -> None:
    """Recommend taking the top discard or drawing from the deck."""

    round_rank = _parse_round(round_code)
    top = _parse_cards([candidate])[0]
    hand = _parse_cards(cards)
    recommendation = recommend_draw(top, hand, round_rank)
    console.print(DrawReportView(candidate=top, round_rank=round_rank, recommendation=recommendation).render())


@app.command("benchmark")
def benchmark_cli(
    hands: int = typer.Option(200, min=1, help="Number of random hands to deal."),
    round_code: str = typer.Option("7", "--round", "-r", help="Wild rank of the round (3-10, J, Q, K)."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
) -> None:
    """Deal random hands and report how well they meld."""

    round_rank = _parse_round(round_code)
    report = benchmark.run_benchmark(hands, round_rank, seed=seed)
    console.print(benchmark_table(report))


def main() -> None:
    """Entry-point for ``python -m fivecrowns.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
