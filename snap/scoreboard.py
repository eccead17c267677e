"""Helpers for tracking multi-round Snap match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["RoundSummary", "PlayerMatchTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Outcome captured when a round ends.

    ``hitter_index`` is ``None`` when the round ran out of cards without
    anybody hitting.
    """

    round_number: int
    hitter_index: int | None
    snapped: bool
    previous: Any | None
    current: Any | None
    flips: int


@dataclass(frozen=True, slots=True)
class PlayerMatchTotal:
    """Aggregate match totals accumulated across all recorded rounds."""

    player_index: int
    snaps: int
    misses: int
    net_points: int


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates round summaries for a match."""

    num_players: int
    rounds: list[RoundSummary] = field(default_factory=list)
    _snaps: list[int] = field(init=False, repr=False)
    _misses: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_players <= 0:
            raise ValueError("num_players must be positive")
        self._snaps = [0 for _ in range(self.num_players)]
        self._misses = [0 for _ in range(self.num_players)]

    def record(self, summary: RoundSummary) -> None:
        """Record ``summary`` and update cumulative totals."""

        idx = summary.hitter_index
        if idx is not None and (idx < 0 or idx >= self.num_players):
            raise ValueError("player index out of range")
        self.rounds.append(summary)
        if idx is None:
            return
        if summary.snapped:
            self._snaps[idx] += 1
        else:
            self._misses[idx] += 1

    def totals(self) -> list[PlayerMatchTotal]:
        """Return the cumulative totals for each player in seating order."""

        return [
            PlayerMatchTotal(
                player_index=idx,
                snaps=self._snaps[idx],
                misses=self._misses[idx],
                net_points=self._snaps[idx] - self._misses[idx],
            )
            for idx in range(self.num_players)
        ]
