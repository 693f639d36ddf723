"""Countdown that drives the exam clock and forces submission at zero."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Protocol

from exam_app.constants.exam_constants import URGENT_THRESHOLD_SECONDS, WARN_THRESHOLD_SECONDS
from exam_app.core.models import TimerTick
from exam_app.core.services.tick_sources import ThreadTickSource

logger = logging.getLogger(__name__)


class TickSource(Protocol):
    """Recurring callback source, typically firing once per second."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...


class TickSourceFactory(Protocol):
    """Builds a tick source; ticks are delivered while holding ``guard``."""

    def __call__(self, callback: Callable[[], None], *, guard: RLock | None = None) -> TickSource: ...


def default_tick_source_factory(callback: Callable[[], None], *, guard: RLock | None = None) -> TickSource:
    return ThreadTickSource(callback, guard=guard)


class CountdownTimer:
    """Counts whole seconds down to zero and signals expiry exactly once.

    ``guard`` is handed to the tick source; the owner passes the lock that
    protects the state touched by ``on_tick`` and ``on_expire``.
    """

    def __init__(
        self,
        duration_seconds: int,
        on_tick: Callable[[TimerTick], None] | None = None,
        on_expire: Callable[[], None] | None = None,
        *,
        warn_threshold: int = WARN_THRESHOLD_SECONDS,
        urgent_threshold: int = URGENT_THRESHOLD_SECONDS,
        tick_source_factory: TickSourceFactory | None = None,
        guard: RLock | None = None,
    ) -> None:
        if duration_seconds <= 0:
            raise ValueError("Countdown duration must be a positive number of seconds.")
        self._remaining = duration_seconds
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._warn_threshold = warn_threshold
        self._urgent_threshold = urgent_threshold
        self._expired = False
        self._cancelled = False
        factory = tick_source_factory or default_tick_source_factory
        self._source = factory(self.tick, guard=guard)

    @property
    def remaining(self) -> int:
        return self._remaining

    def is_active(self) -> bool:
        return self._source.is_active()

    def is_expired(self) -> bool:
        return self._expired

    def snapshot(self) -> TimerTick:
        return TimerTick(
            remaining=self._remaining,
            warn=self._remaining <= self._warn_threshold,
            urgent=self._remaining <= self._urgent_threshold,
            expired=self._expired,
        )

    def start(self) -> None:
        """Begin ticking from the current remaining value; no-op when already running."""
        if self._expired or self._cancelled or self._source.is_active():
            return
        self._source.start()

    def pause(self) -> None:
        self._source.stop()

    def resume(self) -> None:
        self.start()

    def stop(self) -> None:
        """Cancel the countdown for good; later ticks are ignored."""
        self._cancelled = True
        self._source.stop()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self._expired or self._cancelled or not self._source.is_active():
            return
        self._remaining = max(0, self._remaining - 1)
        if self._remaining == 0:
            self._expired = True
            self._source.stop()

        snapshot = self.snapshot()
        if self._on_tick is not None:
            self._on_tick(snapshot)
        if snapshot.expired:
            logger.info("Countdown reached zero.")
            if self._on_expire is not None:
                self._on_expire()
