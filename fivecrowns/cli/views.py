"""Composable view primitives for the Five Crowns CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..benchmark import BenchmarkReport
from ..cards import Card, Rank
from ..draw import DrawDecision, DrawRecommendation
from ..evaluation import DiscardAdvice
from ..melds import display_order
from ..rules import HandSummary
from .render import format_card, format_cards

_DECISION_STYLES = {
    DrawDecision.TAKE: ("Take from Discard", "green"),
    DrawDecision.SKIP: ("Draw from Deck", "red"),
    DrawDecision.MAYBE: ("Maybe Take Discard", "yellow"),
}


@dataclass(slots=True)
class HandReportView:
    """Renderable summarising the melds, leftovers and discard for a hand."""

    hand: Sequence[Card]
    round_rank: Rank
    summary: HandSummary
    advice: DiscardAdvice | None

    def _meld_table(self) -> Table:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("Meld", justify="left", style="bold")
        table.add_column("Kind", justify="left")
        table.add_column("Cards", justify="left")
        table.add_column("As", justify="left")

        for idx, meld in enumerate(self.summary.melds, start=1):
            ranks = meld.represented_ranks()
            represented = " ".join(rank.value for rank in ranks) if ranks else "—"
            table.add_row(
                f"M{idx}",
                meld.kind.value.title(),
                format_cards(display_order(meld, self.round_rank), self.round_rank),
                represented,
            )
        if not self.summary.melds:
            table.add_row("—", "—", "[dim]No melds found[/dim]", "—")
        return table

    def _status_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Round[/cyan]: {self.round_rank.value} (wild)")
        grid.add_row(f"[cyan]Hand[/cyan]: {format_cards(self.hand, self.round_rank)}")
        grid.add_row(f"[cyan]Leftover[/cyan]: {format_cards(self.summary.leftover, self.round_rank)}")
        grid.add_row(f"[cyan]Remaining points[/cyan]: {self.summary.remaining_points}")
        status = "[bold green]Yes[/bold green]" if self.summary.can_go_out else "No"
        grid.add_row(f"[cyan]Can go out[/cyan]: {status}")
        if self.advice is not None:
            strategy = self.advice.strategy.value.replace("_", " ")
            grid.add_row(
                f"[cyan]Discard[/cyan]: {format_card(self.advice.card, self.round_rank)}"
                f" (card {self.advice.index + 1}, {strategy})"
            )
        return Panel(grid, title="Hand", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        return Group(
            Panel(self._meld_table(), title="Best Melds", box=box.SQUARE, border_style="green"),
            self._status_panel(),
        )


@dataclass(slots=True)
class DrawReportView:
    """Renderable describing a take-or-draw recommendation."""

    candidate: Card
    round_rank: Rank
    recommendation: DrawRecommendation

    def render(self) -> RenderableType:
        title, colour = _DECISION_STYLES[self.recommendation.decision]
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Discard pile[/cyan]: {format_card(self.candidate, self.round_rank)}")
        for reason in self.recommendation.reasoning:
            grid.add_row(f"• {reason}")
        grid.add_row(
            f"[cyan]Current[/cyan]: {self.recommendation.remaining_before} pts   "
            f"[cyan]With discard[/cyan]: {self.recommendation.remaining_after} pts"
        )
        if self.recommendation.improvement > 0:
            grid.add_row(f"[green]Improvement: -{self.recommendation.improvement} points[/green]")
        return Panel(grid, title=f"Draw Recommendation: {title}", box=box.ROUNDED, border_style=colour)


def benchmark_table(report: BenchmarkReport) -> Table:
    table = Table(title="Meld Benchmark", box=box.SIMPLE_HEAVY)
    table.add_column("Round", justify="center")
    table.add_column("Hands", justify="right")
    table.add_column("Cards", justify="right")
    table.add_column("Melded", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("P90 Remaining", justify="right")
    table.add_column("Go Out", justify="right")
    table.add_row(
        report.round_rank.value,
        str(report.hands),
        str(report.hand_size + 1),
        f"{report.mean_melded_cards:.2f}",
        f"{report.mean_remaining_points:.2f}",
        f"{report.p90_remaining_points:.1f}",
        f"{report.go_out_rate:.1%}",
    )
    return table
