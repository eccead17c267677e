"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..cards import Card
from ..game import SnapGame
from ..scoreboard import PlayerMatchTotal

_SUIT_SYMBOLS = {
    "S": ("♠", "cyan"),
    "H": ("♥", "red"),
    "D": ("♦", "magenta"),
    "C": ("♣", "green"),
}


def format_card(card: Card | None) -> str:
    """Return a Rich-rendered label for ``card``."""

    if card is None:
        return "[dim]—[/dim]"
    if not card.face_up:
        return "[blue]▒▒[/blue]"
    symbol, color = _SUIT_SYMBOLS.get(card.suit.value, (card.suit.value, "white"))
    return f"[{color}]{card.rank.value}{symbol}[/{color}]"


def render_table(game: SnapGame) -> RenderableType:
    """Return a panel showing the flip window and deck status."""

    grid = Table.grid(expand=True, padding=(0, 2))
    grid.add_column(justify="center")
    grid.add_column(justify="center")
    grid.add_row("[dim]Previous[/dim]", "[bold]Top[/bold]")
    grid.add_row(
        Text.from_markup(format_card(game.previous_card)),
        Text.from_markup(format_card(game.top_card)),
    )

    status = "[green]Running[/green]" if game.is_started else "[yellow]Stopped[/yellow]"
    meta = Table.grid(expand=True)
    meta.add_column(justify="left")
    meta.add_row(f"[cyan]Round[/cyan]: {game.round_number}  {status}")
    meta.add_row(f"[cyan]Flip every[/cyan]: {game.flip_time} ms")
    meta.add_row(f"[cyan]Cards left[/cyan]: {'yes' if game.cards_remain else 'none'}")
    return Panel(Group(grid, meta), title="Table", border_style="cyan", box=box.ROUNDED)


def render_totals(
    totals: Sequence[PlayerMatchTotal],
    scores: Sequence[int],
    *,
    title: str = "Match Totals",
) -> Table:
    """Return a Rich table of per-player snaps, misses and scores."""

    table = Table(title=title, box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Player", justify="center")
    table.add_column("Snaps", justify="right")
    table.add_column("Misses", justify="right")
    table.add_column("Score", justify="right")

    best = max(scores, default=0)
    for total in totals:
        idx = total.player_index
        score = scores[idx] if idx < len(scores) else total.net_points
        label = f"P{idx}"
        score_str = str(score)
        if score == best and any(scores):
            label = f"[bold blue]{label}[/bold blue]"
            score_str = f"[bold blue]{score_str}[/bold blue]"
        table.add_row(label, str(total.snaps), str(total.misses), score_str)
    if not totals:
        table.add_row(Text.from_markup("[dim]No results yet[/dim]"), "-", "-", "-")
    return table
