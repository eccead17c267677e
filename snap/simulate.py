"""Head-to-head harness pitting scripted Snap players against each other."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

from . import scoreboard
from .cards import Deck
from .clock import ManualTimer
from .game import SnapConfig, SnapGame
from .logging_utils import get_logger

__all__ = ["BotPlayer", "HeadToHeadReport", "run_head_to_head"]

logger = get_logger(__name__)

MAX_ROUND_MS = 10 * 60 * 1000


@dataclass(frozen=True, slots=True)
class BotPlayer:
    """A scripted player with a fixed reaction time."""

    reaction_ms: int
    mistake_rate: float = 0.0

    def __post_init__(self) -> None:
        if self.reaction_ms < 0:
            raise ValueError("reaction_ms must be non-negative")
        if not 0.0 <= self.mistake_rate <= 1.0:
            raise ValueError("mistake_rate must be within [0, 1]")


@dataclass(frozen=True, slots=True)
class HeadToHeadReport:
    """Summary of a simulated match."""

    history: scoreboard.MatchHistory
    totals: Sequence[scoreboard.PlayerMatchTotal]
    scores: tuple[int, ...]
    flips: int


def _plan_hits(game: SnapGame, bots: Sequence[BotPlayer], rng: random.Random) -> list[int | None]:
    previous, current = game.previous_card, game.top_card
    matching = previous is not None and current is not None and previous.rank == current.rank
    plans: list[int | None] = []
    for bot in bots:
        if matching or rng.random() < bot.mistake_rate:
            plans.append(bot.reaction_ms)
        else:
            plans.append(None)
    return plans


def _earliest_hitter(plans: Sequence[int | None], since_flip: int) -> int | None:
    due = [(delay, idx) for idx, delay in enumerate(plans) if delay is not None and delay <= since_flip]
    if not due:
        return None
    return min(due)[1]


def _play_round(
    game: SnapGame,
    timer: ManualTimer,
    bots: Sequence[BotPlayer],
    tick_ms: int,
    rng: random.Random,
) -> None:
    """Run one round until a hit or an exhausted deck ends it."""

    game.start()
    seen = game.top_card
    plans = _plan_hits(game, bots, rng)
    since_flip = 0

    for _ in range(MAX_ROUND_MS // tick_ms):
        if not game.is_started:
            break
        hitter = _earliest_hitter(plans, since_flip)
        if hitter is not None:
            game.hit(hitter)
            break

        timer.advance(tick_ms)
        since_flip += tick_ms
        game.update()
        if game.top_card is not seen:
            seen = game.top_card
            since_flip = 0
            plans = _plan_hits(game, bots, rng)
    else:
        logger.warning("round %d hit the simulation time limit", game.round_number)


def run_head_to_head(
    rounds: int,
    bots: Sequence[BotPlayer],
    *,
    flip_time: int = 1000,
    tick_ms: int = 10,
    seed: int = 123,
) -> HeadToHeadReport:
    """Play up to ``rounds`` rounds on a single deck and report the totals."""

    if rounds <= 0:
        raise ValueError("rounds must be positive")
    if not bots:
        raise ValueError("at least one bot is required")
    if tick_ms <= 0:
        raise ValueError("tick_ms must be positive")

    rng = random.Random(seed)
    timer = ManualTimer()
    config = SnapConfig(num_players=len(bots), flip_time=flip_time, end_on_exhaustion=True)
    game = SnapGame(deck=Deck(rng=rng), timer=timer, config=config)

    for _ in range(rounds):
        if not game.cards_remain:
            break
        _play_round(game, timer, bots, tick_ms, rng)

    total_flips = sum(summary.flips for summary in game.history.rounds)
    logger.debug("simulated %d round(s), %d flip(s)", len(game.history.rounds), total_flips)
    return HeadToHeadReport(
        history=game.history,
        totals=game.history.totals(),
        scores=game.scores,
        flips=total_flips,
    )
