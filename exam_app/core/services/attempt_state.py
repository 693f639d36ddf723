"""Service holding the navigable state of a single exam attempt."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from exam_app.core.models import AttemptStatus, Question, QuestionId, QuestionView

logger = logging.getLogger(__name__)


class AttemptState:
    """Tracks position, selections and submission status of one attempt.

    Once submitted, every mutating call is ignored and returns ``False`` (or
    the unchanged position), since late events such as a stray timer tick are
    expected rather than programming errors.
    """

    def __init__(self, questions: Sequence[Question], time_remaining: int = 0) -> None:
        if not questions:
            raise ValueError("An exam attempt needs at least one question.")
        if time_remaining < 0:
            raise ValueError("Remaining time cannot be negative.")

        self._questions: tuple[Question, ...] = tuple(questions)
        self._index_by_id: dict[QuestionId, int] = {}
        for index, question in enumerate(self._questions):
            if question.id in self._index_by_id:
                raise ValueError(f"Duplicate question id {question.id!r} in attempt.")
            self._index_by_id[question.id] = index

        self._position: int = 0
        self._selections: dict[QuestionId, frozenset[int]] = {}
        self._status: AttemptStatus = AttemptStatus.IN_PROGRESS
        self._time_remaining: int = time_remaining

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def position(self) -> int:
        return self._position

    @property
    def status(self) -> AttemptStatus:
        return self._status

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def selections(self) -> dict[QuestionId, frozenset[int]]:
        """Return a copy of the recorded selections keyed by question id."""
        return dict(self._selections)

    def is_submitted(self) -> bool:
        return self._status is AttemptStatus.SUBMITTED

    def selection_for(self, question_id: QuestionId) -> frozenset[int] | None:
        """Return the recorded selection, or None when the question is unanswered."""
        return self._selections.get(question_id)

    def record_answer(self, question_id: QuestionId, indices: Iterable[int]) -> bool:
        """Overwrite the selection for a question. Returns False once submitted."""
        if self.is_submitted():
            logger.debug("Ignoring answer for %r after submission.", question_id)
            return False

        try:
            question = self._questions[self._index_by_id[question_id]]
        except KeyError:
            raise KeyError(f"Unknown question id {question_id!r}.") from None

        selection = frozenset(indices)
        for index in selection:
            if isinstance(index, bool) or not isinstance(index, int):
                raise ValueError(f"Selected option {index!r} is not an integer index.")
            if not 0 <= index < len(question.options):
                raise ValueError(
                    f"Selected option {index} is out of range for question {question_id!r}."
                )

        self._selections[question_id] = selection
        return True

    def go_to(self, delta: int, pending_selection: Iterable[int] | None = None) -> int:
        """Commit the pending selection, then move by ``delta`` within bounds."""
        if self.is_submitted():
            return self._position
        self._commit_pending(pending_selection)
        self._position = max(0, min(self._position + delta, len(self._questions) - 1))
        return self._position

    def current_question(self) -> QuestionView:
        question = self._questions[self._position]
        return QuestionView(
            question=question,
            selection=self._selections.get(question.id, frozenset()),
            position=self._position,
            total=len(self._questions),
            answered_count=sum(1 for selection in self._selections.values() if selection),
        )

    def record_time_remaining(self, seconds: int) -> bool:
        if self.is_submitted():
            return False
        self._time_remaining = max(0, seconds)
        return True

    def submit(self, pending_selection: Iterable[int] | None = None) -> bool:
        """Freeze the attempt. Returns True only for the call that submitted it."""
        if self.is_submitted():
            return False
        self._commit_pending(pending_selection)
        self._status = AttemptStatus.SUBMITTED
        return True

    def _commit_pending(self, pending_selection: Iterable[int] | None) -> None:
        if pending_selection is None:
            return
        self.record_answer(self._questions[self._position].id, pending_selection)
