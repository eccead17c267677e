"""Elapsed-time timers that drive automatic card flips."""

from __future__ import annotations

import time
from typing import Callable, Protocol

__all__ = ["Timer", "StopwatchTimer", "ManualTimer"]


class Timer(Protocol):
    """Millisecond stopwatch consumed by :class:`snap.game.SnapGame`."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def reset(self) -> None: ...

    @property
    def elapsed(self) -> int: ...


class StopwatchTimer:
    """Wall-clock timer.

    ``start`` counts from zero, ``stop`` freezes the reading and ``reset``
    zeroes it while leaving a running timer running.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._running = False
        self._origin = 0.0
        self._frozen_ms = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        if not self._running:
            return self._frozen_ms
        return int((self._clock() - self._origin) * 1000)

    def start(self) -> None:
        self._origin = self._clock()
        self._frozen_ms = 0
        self._running = True

    def stop(self) -> None:
        if self._running:
            self._frozen_ms = self.elapsed
            self._running = False

    def reset(self) -> None:
        self._origin = self._clock()
        self._frozen_ms = 0


class ManualTimer:
    """Virtual clock advanced explicitly by the caller."""

    def __init__(self) -> None:
        self._running = False
        self._elapsed_ms = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        return self._elapsed_ms

    def start(self) -> None:
        self._elapsed_ms = 0
        self._running = True

    def stop(self) -> None:
        self._running = False

    def reset(self) -> None:
        self._elapsed_ms = 0

    def advance(self, ms: int) -> None:
        """Add ``ms`` milliseconds when the timer is running."""

        if ms < 0:
            raise ValueError("cannot advance a timer backwards")
        if self._running:
            self._elapsed_ms += ms
