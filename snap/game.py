"""The Snap state machine.

Cards are flipped from the deck at a fixed interval and a player scores by
hitting when the two most recently flipped cards share a rank. The first
hit from any player ends the round; ``start`` begins the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .cards import CardLike, Deck, DeckLike
from .clock import StopwatchTimer, Timer
from .logging_utils import get_logger
from .scoreboard import MatchHistory, RoundSummary

__all__ = ["SnapConfig", "HitOutcome", "SnapGame"]

logger = get_logger(__name__)


@dataclass(slots=True)
class SnapConfig:
    """Runtime configuration for a game of Snap."""

    num_players: int = 2
    flip_time: int = 1000
    end_on_exhaustion: bool = False

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ValueError("num_players must be positive")


@dataclass(frozen=True, slots=True)
class HitOutcome:
    """Result of a hit that was accepted by the game."""

    player_index: int
    snapped: bool
    delta: int
    previous: CardLike | None
    current: CardLike | None


class SnapGame:
    """Two-card flip window, per-player scores and the round lifecycle."""

    def __init__(
        self,
        deck: DeckLike | None = None,
        timer: Timer | None = None,
        config: SnapConfig | None = None,
        rng: Any | None = None,
    ) -> None:
        self.config = config if config is not None else SnapConfig()
        self._deck: DeckLike = deck if deck is not None else Deck(rng=rng)
        self._timer: Timer = timer if timer is not None else StopwatchTimer()
        # [previous, current]
        self._top_cards: list[CardLike | None] = [None, None]
        self._flip_time = self.config.flip_time
        self._scores = [0 for _ in range(self.config.num_players)]
        self._started = False
        self._round_number = 0
        self._round_flips = 0
        self.history = MatchHistory(self.config.num_players)

    @property
    def top_card(self) -> CardLike | None:
        """The face-up card on top of the flip pile."""

        return self._top_cards[1]

    @property
    def previous_card(self) -> CardLike | None:
        """The card flipped just before ``top_card``."""

        return self._top_cards[0]

    @property
    def cards_remain(self) -> bool:
        return self._deck.cards_remaining() > 0

    @property
    def flip_time(self) -> int:
        """Milliseconds that must pass before the next card is flipped."""

        return self._flip_time

    @flip_time.setter
    def flip_time(self, value: int) -> None:
        self._flip_time = value

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def num_players(self) -> int:
        return len(self._scores)

    @property
    def scores(self) -> tuple[int, ...]:
        return tuple(self._scores)

    @property
    def round_number(self) -> int:
        return self._round_number

    def start(self) -> None:
        """Shuffle, reveal the first card and start the flip timer."""

        if self._started:
            return
        self._started = True
        self._round_number += 1
        self._round_flips = 0
        self._deck.shuffle()
        self.flip_next_card()
        self._timer.start()
        logger.info(
            "round %d started with %d card(s) left",
            self._round_number,
            self._deck.cards_remaining(),
        )

    def flip_next_card(self) -> None:
        """Move the top card down and reveal a new one from the deck."""

        if self._deck.cards_remaining() > 0:
            self._top_cards[0] = self._top_cards[1]
            card = self._deck.draw()
            card.turn_over()
            self._top_cards[1] = card
            self._round_flips += 1

    def update(self) -> None:
        """Flip the next card once the flip interval has elapsed."""

        if not self._started:
            return
        if self._timer.elapsed > self._flip_time:
            self._timer.reset()
            if self.config.end_on_exhaustion and not self.cards_remain:
                self._end_exhausted_round()
                return
            self.flip_next_card()

    def score(self, idx: int) -> int:
        if 0 <= idx < len(self._scores):
            return self._scores[idx]
        return 0

    def hit(self, player: int) -> HitOutcome | None:
        """Player ``player`` calls snap on the top two cards.

        Ignored unless the round is running and ``player`` is seated.
        """

        if not (0 <= player < len(self._scores) and self._started):
            return None

        previous, current = self._top_cards
        snapped = previous is not None and current is not None and previous.rank == current.rank
        delta = 1 if snapped else -1
        self._scores[player] += delta

        self._started = False
        self._timer.stop()

        self.history.record(
            RoundSummary(
                round_number=self._round_number,
                hitter_index=player,
                snapped=snapped,
                previous=previous,
                current=current,
                flips=self._round_flips,
            )
        )
        logger.info(
            "round %d: P%d %s (score %d)",
            self._round_number,
            player,
            "snapped" if snapped else "missed",
            self._scores[player],
        )
        return HitOutcome(
            player_index=player,
            snapped=snapped,
            delta=delta,
            previous=previous,
            current=current,
        )

    def _end_exhausted_round(self) -> None:
        self._started = False
        self._timer.stop()
        previous, current = self._top_cards
        self.history.record(
            RoundSummary(
                round_number=self._round_number,
                hitter_index=None,
                snapped=False,
                previous=previous,
                current=current,
                flips=self._round_flips,
            )
        )
        logger.info("round %d ended: deck exhausted", self._round_number)
