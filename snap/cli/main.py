"""Typer entry-point wiring for the Snap CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from .. import simulate
from ..logging_utils import LOG_LEVEL, setup_logging
from .render import render_totals
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


@app.command()
def play(
    flip_time: int = typer.Option(1000, help="Milliseconds between automatic flips."),
    seed: int | None = typer.Option(None, help="Random seed for reproducible shuffles (omit for randomness)."),
    log_file: str | None = typer.Option(None, help="Write logs to this file while the UI runs."),
    log_level: str | None = typer.Option(None, help="Logging level for --log-file (defaults to LOG_LEVEL)."),
) -> None:
    """Play Snap for two players at one keyboard."""

    if log_level is not None and log_file is None:
        raise typer.BadParameter("--log-level requires --log-file while the UI owns the terminal.")
    if log_file is not None:
        setup_logging(log_level or LOG_LEVEL, filename=log_file)
    run_textual_app(flip_time=flip_time, seed=seed)


@app.command("simulate")
def simulate_cli(
    rounds: int = typer.Option(10, min=1, help="Number of rounds to play."),
    flip_time: int = typer.Option(800, help="Milliseconds between automatic flips."),
    p0_reaction: int = typer.Option(300, min=0, help="Reaction time of P0 in milliseconds."),
    p1_reaction: int = typer.Option(450, min=0, help="Reaction time of P1 in milliseconds."),
    mistake_rate: float = typer.Option(0.05, min=0.0, max=1.0, help="Chance a bot snaps on a non-match."),
    tick_ms: int = typer.Option(10, min=1, help="Simulated frame length in milliseconds."),
    seed: int = typer.Option(123, help="Random seed for the simulation."),
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level."),
) -> None:
    """Run two scripted players against each other."""

    setup_logging(log_level)
    if max(p0_reaction, p1_reaction) >= flip_time > 0:
        raise typer.BadParameter("Reaction times must be shorter than the flip interval.")

    bots = [
        simulate.BotPlayer(reaction_ms=p0_reaction, mistake_rate=mistake_rate),
        simulate.BotPlayer(reaction_ms=p1_reaction, mistake_rate=mistake_rate),
    ]
    report = simulate.run_head_to_head(
        rounds=rounds,
        bots=bots,
        flip_time=flip_time,
        tick_ms=tick_ms,
        seed=seed,
    )

    console.print(render_totals(report.totals, report.scores, title="Simulated Match"))
    if report.history.rounds:
        console.print(
            f"[cyan]{len(report.history.rounds)} round(s) simulated, {report.flips} card(s) flipped.[/cyan]"
        )


def main() -> None:
    """Entry-point for ``python -m snap.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
