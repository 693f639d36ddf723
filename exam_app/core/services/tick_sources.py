"""Once-per-second tick source for the exam countdown."""

from __future__ import annotations

from threading import Event, RLock, Thread
from typing import Callable

from exam_app.constants.exam_constants import TICK_INTERVAL_MS


class ThreadTickSource:
    """Tick source running in a daemon thread.

    ``guard`` is a re-entrant lock held while a tick is delivered and while
    the source is started or stopped. Passing the owner's lock makes a tick
    that raced a stop/start pair land after it, where it is recognised as
    stale and dropped.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval_ms: int = TICK_INTERVAL_MS,
        *,
        guard: RLock | None = None,
    ) -> None:
        self._callback = callback
        self._interval_seconds = interval_ms / 1000
        self._guard = guard if guard is not None else RLock()
        self._stop_event: Event | None = None
        self._thread: Thread | None = None

    def start(self) -> None:
        with self._guard:
            if self._stop_event is not None:
                return
            stop_event = Event()
            self._stop_event = stop_event
            self._thread = Thread(
                target=self._run,
                args=(stop_event,),
                name="ExamCountdownTicker",
                daemon=True,
            )
            self._thread.start()

    def stop(self) -> None:
        with self._guard:
            if self._stop_event is None:
                return
            # Retires the running thread; it exits without delivering again.
            self._stop_event.set()
            self._stop_event = None
            self._thread = None

    def is_active(self) -> bool:
        with self._guard:
            return self._stop_event is not None

    def _run(self, stop_event: Event) -> None:
        while not stop_event.wait(self._interval_seconds):
            with self._guard:
                if stop_event.is_set():
                    return
                self._callback()
