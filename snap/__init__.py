"""Top-level package for the Snap card game."""

from . import cards, clock, game, scoreboard
from .game import HitOutcome, SnapConfig, SnapGame

__all__ = [
    "cards",
    "clock",
    "game",
    "scoreboard",
    "HitOutcome",
    "SnapConfig",
    "SnapGame",
]
