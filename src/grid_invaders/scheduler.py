"""
One-shot timers polled by the tick loop.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from grid_invaders.utils import logger

Clock = Callable[[], float]


@dataclass(eq=False)
class Timer:
    """
    Handle for a scheduled callback.
    """

    due: float
    callback: Callable[[], None]
    name: str = ""
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        if self.pending:
            logger.debug(f"Timer {self.name!r} cancelled")
        self.cancelled = True


@dataclass
class Scheduler:
    """
    Runs callbacks once their delay has elapsed on ``clock``.

    Nothing runs on its own: the owner calls :meth:`run_due` from its tick,
    so callbacks execute on the tick thread between frames.
    """

    clock: Clock = time.monotonic
    _timers: list[Timer] = field(default_factory=list)

    def call_later(
        self, delay: float, callback: Callable[[], None], name: str = ""
    ) -> Timer:
        """
        :param delay: Seconds from now
        :type delay: float

        :param callback: Called with no arguments
        :param name: Label for logs

        :return: Timer
        """
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay!r}")
        timer = Timer(due=self.clock() + delay, callback=callback, name=name)
        self._timers.append(timer)
        return timer

    def run_due(self) -> int:
        """
        Fire every pending timer whose time has come.

        :return: Number of callbacks run
        """
        now = self.clock()
        due = [t for t in self._timers if t.pending and t.due <= now]
        self._timers = [t for t in self._timers if t.pending and t.due > now]
        for timer in sorted(due, key=lambda t: t.due):
            timer.fired = True
            timer.callback()
        return len(due)

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()

    def __len__(self) -> int:
        return sum(1 for t in self._timers if t.pending)
