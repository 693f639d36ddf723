"""Business logic for the exam session shared between UI and API."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Iterable, Mapping, Sequence

from exam_app.core.exam_config import ExamConfig
from exam_app.core.models import GradeReport, QuestionId, QuestionView, TimerTick
from exam_app.core.randomizer import Randomizer
from exam_app.core.services.attempt_state import AttemptState
from exam_app.core.services.countdown_timer import CountdownTimer, TickSourceFactory
from exam_app.core.services.grader import grade
from exam_app.core.services.pool_builder import PoolBuilder

logger = logging.getLogger(__name__)


class ExamManager:
    """Facade owning the attempt, its countdown and the final report.

    The Qt window, the API worker threads and the countdown thread all call
    in here, so every entry point takes the same lock and no Qt object is
    owned by the manager. Ticks are delivered while holding the lock; it is
    re-entrant because countdown expiry submits the exam from inside the tick
    handler.
    """

    def __init__(
        self,
        config: ExamConfig | None = None,
        randomizer: Randomizer | None = None,
        tick_source_factory: TickSourceFactory | None = None,
    ) -> None:
        self._lock = RLock()
        self._config = config or ExamConfig()
        self._randomizer = randomizer or Randomizer(self._config.shuffle_seed)
        self._pool_builder = PoolBuilder(self._randomizer)
        self._tick_source_factory = tick_source_factory

        self._bank: list[Mapping[str, Any]] = []
        self._attempt: AttemptState | None = None
        self._timer: CountdownTimer | None = None
        self._report: GradeReport | None = None
        self._attempt_generation: int = 0

    @property
    def config(self) -> ExamConfig:
        return self._config

    # --- Session lifecycle ---

    def start_exam(self, raw_bank: Sequence[Mapping[str, Any]]) -> QuestionView:
        """Build a fresh pool from ``raw_bank`` and start the countdown."""
        with self._lock:
            questions = self._pool_builder.build_pool(raw_bank, self._config.sample_size)
            self._stop_timer()
            self._bank = list(raw_bank)
            self._attempt = AttemptState(questions, time_remaining=self._config.duration_seconds)
            self._report = None
            self._attempt_generation += 1
            self._timer = CountdownTimer(
                self._config.duration_seconds,
                on_tick=self._handle_tick,
                on_expire=self._handle_expiry,
                warn_threshold=self._config.warn_threshold_seconds,
                urgent_threshold=self._config.urgent_threshold_seconds,
                tick_source_factory=self._tick_source_factory,
                guard=self._lock,
            )
            self._timer.start()
            logger.info(
                "Exam started with %d question(s) and %d second(s) on the clock.",
                len(questions),
                self._config.duration_seconds,
            )
            return self._attempt.current_question()

    def restart_exam(self) -> QuestionView:
        """Start a new attempt with a fresh shuffle of the last bank."""
        with self._lock:
            if not self._bank:
                raise RuntimeError("No exam has been started yet.")
            return self.start_exam(self._bank)

    def get_attempt_generation(self) -> int:
        """Counter bumped on every new attempt so views can detect a restart."""
        with self._lock:
            return self._attempt_generation

    def has_exam(self) -> bool:
        with self._lock:
            return self._attempt is not None

    def is_submitted(self) -> bool:
        with self._lock:
            return self._attempt is not None and self._attempt.is_submitted()

    # --- Attempt delegation ---

    def current_view(self) -> QuestionView:
        with self._lock:
            return self._require_attempt().current_question()

    def record_answer(self, question_id: QuestionId, indices: Iterable[int]) -> bool:
        with self._lock:
            return self._require_attempt().record_answer(question_id, indices)

    def go_to(self, delta: int, pending_selection: Iterable[int] | None = None) -> QuestionView:
        with self._lock:
            attempt = self._require_attempt()
            attempt.go_to(delta, pending_selection)
            return attempt.current_question()

    def next_question(self, pending_selection: Iterable[int] | None = None) -> QuestionView:
        return self.go_to(1, pending_selection)

    def previous_question(self, pending_selection: Iterable[int] | None = None) -> QuestionView:
        return self.go_to(-1, pending_selection)

    def submit(self, pending_selection: Iterable[int] | None = None) -> GradeReport:
        """Submit the attempt and return its report. Repeated calls return the same report."""
        with self._lock:
            return self._submit_locked(pending_selection, reason="user")

    def get_report(self) -> GradeReport | None:
        with self._lock:
            return self._report

    # --- Timer delegation ---

    def pause_timer(self) -> None:
        with self._lock:
            if self._timer is not None and not self.is_submitted():
                self._timer.pause()

    def resume_timer(self) -> None:
        with self._lock:
            if self._timer is not None and not self.is_submitted():
                self._timer.resume()

    def is_timer_running(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_active()

    def time_snapshot(self) -> TimerTick:
        with self._lock:
            if self._timer is None:
                raise RuntimeError("No exam has been started yet.")
            return self._timer.snapshot()

    # --- Internals ---

    def _require_attempt(self) -> AttemptState:
        if self._attempt is None:
            raise RuntimeError("No exam has been started yet.")
        return self._attempt

    def _submit_locked(self, pending_selection: Iterable[int] | None, reason: str) -> GradeReport:
        attempt = self._require_attempt()
        self._stop_timer()
        if attempt.submit(pending_selection) or self._report is None:
            self._report = grade(attempt)
            logger.info(
                "Exam submitted (%s): %d/%d correct.",
                reason,
                self._report.score,
                self._report.total,
            )
        return self._report

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def _handle_tick(self, tick: TimerTick) -> None:
        with self._lock:
            if self._attempt is not None:
                self._attempt.record_time_remaining(tick.remaining)

    def _handle_expiry(self) -> None:
        with self._lock:
            if self._attempt is None or self._attempt.is_submitted():
                return
            self._submit_locked(None, reason="time expired")
