"""Textual-powered interactive Snap interface."""

from __future__ import annotations

import random
from typing import Callable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from ...game import SnapConfig, SnapGame
from ...logging_utils import get_logger
from ..render import format_card, render_table, render_totals

MAX_EVENT_LINES = 18
TICK_SECONDS = 0.02
FLIP_STEP_MS = 100

logger = get_logger(__name__)


class EventLog(Static):
    """Simple rolling log rendered inside a panel."""

    lines: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._refresh()

    def add(self, message: str) -> None:
        log = list(self.lines)
        log.append(message)
        self.lines = tuple(log[-MAX_EVENT_LINES:])

    def watch_lines(self, value: tuple[str, ...]) -> None:
        self._refresh(value)

    def _refresh(self, lines: tuple[str, ...] | None = None) -> None:
        content = Table.grid(padding=(0, 1))
        content.expand = True
        content.add_column(justify="left")
        rows = lines if lines is not None else self.lines
        if rows:
            for line in rows:
                content.add_row(Text.from_markup(line))
        else:
            content.add_row(Text.from_markup("[dim]Event log will appear here[/dim]"))
        self.update(Panel(content, title="Events", border_style="magenta"))


class StatusStrip(Static):
    """Single line status helper."""

    message: reactive[str] = reactive("", init=False)

    def watch_message(self, value: str) -> None:
        self.update(Panel(Text.from_markup(value or "[dim]Ready[/dim]"), border_style="green"))


class SnapTextualApp(App):
    """Textual Snap game UI; the interval timer is the game's driver loop."""

    CSS = """
    Screen {
        layout: vertical;
        height: 100%;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    #left, #right {
        layout: vertical;
        width: 1fr;
        padding: 0 1;
    }

    StatusStrip {
        width: 100%;
    }

    EventLog, #table, #scores {
        width: 100%;
        min-height: 6;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit"),
        Binding("space", "start_round", "Start round"),
        Binding("a", "hit(0)", "P0 snap"),
        Binding("l", "hit(1)", "P1 snap"),
        Binding("plus", "adjust_flip(1)", "Slower"),
        Binding("minus", "adjust_flip(-1)", "Faster"),
        Binding("n", "new_deck", "New deck"),
    ]

    def __init__(
        self,
        *,
        flip_time: int,
        seed: int | None,
        game_factory: Callable[[SnapConfig], SnapGame] | None = None,
    ) -> None:
        super().__init__()
        if seed is None:
            seed = random.SystemRandom().randrange(0, 2**63)
        self.seed = seed
        self.rng = random.Random(seed)
        self.flip_time = flip_time
        self._game_factory = game_factory
        self.game = self._new_game()

        self._shown_card: object | None = None
        self.status_strip: StatusStrip | None = None
        self.table_panel: Static | None = None
        self.score_panel: Static | None = None
        self.event_log: EventLog | None = None

    def _new_game(self) -> SnapGame:
        config = SnapConfig(flip_time=self.flip_time)
        if self._game_factory is not None:
            return self._game_factory(config)
        return SnapGame(config=config, rng=self.rng)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.status_strip = StatusStrip(id="status")
        yield self.status_strip

        self.table_panel = Static(id="table")
        self.score_panel = Static(id="scores")
        self.event_log = EventLog(id="events")

        left = Vertical(self.table_panel, self.score_panel, id="left")
        right = Vertical(self.event_log, id="right")
        yield Horizontal(left, right, id="main")
        yield Footer()

    def on_mount(self) -> None:
        self._set_status("Press [bold]Space[/bold] to start. [bold]A[/bold] snaps for P0, [bold]L[/bold] for P1.")
        self._refresh_ui()
        self.set_interval(TICK_SECONDS, self._tick)

    def _tick(self) -> None:
        self.game.update()
        if self.game.top_card is not self._shown_card:
            self._shown_card = self.game.top_card
            self._refresh_ui()
        if self.game.is_started and not self.game.cards_remain:
            self._set_status(
                "[yellow]Deck exhausted.[/yellow] Snap if the last two match, "
                "or press [bold]N[/bold] for a fresh deck."
            )

    def action_start_round(self) -> None:
        if self.game.is_started:
            return
        if not self.game.cards_remain:
            self._set_status("[yellow]No cards left.[/yellow] Press [bold]N[/bold] for a fresh deck.")
            return
        self.game.start()
        if self.event_log:
            self.event_log.add(f"[bold cyan]Round {self.game.round_number}[/bold cyan] started")
        self._set_status("[green]Watch the cards…[/green]")
        self._refresh_ui()

    def action_hit(self, player: int) -> None:
        outcome = self.game.hit(player)
        if outcome is None:
            return
        if self.event_log:
            pair = f"{format_card(outcome.previous)} {format_card(outcome.current)}"
            if outcome.snapped:
                self.event_log.add(f"[yellow]P{player}[/yellow] [bold green]SNAP![/bold green] {pair}")
            else:
                self.event_log.add(f"[yellow]P{player}[/yellow] [red]missed[/red] {pair}")
        self._set_status("Round over. Press [bold]Space[/bold] for the next round.")
        self._refresh_ui()

    def action_adjust_flip(self, direction: int) -> None:
        self.flip_time = max(FLIP_STEP_MS, self.game.flip_time + direction * FLIP_STEP_MS)
        self.game.flip_time = self.flip_time
        self._refresh_ui()

    def action_new_deck(self) -> None:
        # a running round can only be abandoned once its deck is spent
        if self.game.is_started and self.game.cards_remain:
            return
        self.game = self._new_game()
        self._shown_card = None
        if self.event_log:
            self.event_log.add("[bold]New deck dealt[/bold], scores cleared")
        self._set_status("Fresh deck ready. Press [bold]Space[/bold] to start.")
        logger.info("new deck dealt")
        self._refresh_ui()

    def _refresh_ui(self) -> None:
        if self.table_panel:
            self.table_panel.update(render_table(self.game))
        if self.score_panel:
            totals = self.game.history.totals()
            self.score_panel.update(Panel(render_totals(totals, self.game.scores), border_style="bright_blue"))
        self.title = f"Snap • Round {self.game.round_number} • {self.game.flip_time} ms"

    def _set_status(self, message: str) -> None:
        if self.status_strip:
            self.status_strip.message = message


def run_textual_app(*, flip_time: int, seed: int | None) -> None:
    """Launch the Textual UI."""

    app = SnapTextualApp(flip_time=flip_time, seed=seed)
    app.run()
