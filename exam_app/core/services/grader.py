"""Service for scoring a submitted attempt and building its review."""

from __future__ import annotations

from exam_app.core.models import GradeReport, OptionReview, Question, ReviewEntry
from exam_app.core.services.attempt_state import AttemptState


class ExamNotSubmittedError(RuntimeError):
    """Raised when grading is requested before the attempt was submitted."""


def is_correct(question: Question, selection: frozenset[int] | None) -> bool:
    """A question counts only when the selection matches the answer set exactly."""
    if selection is None:
        return False
    return selection == question.answer_set


def review_question(question: Question, selection: frozenset[int] | None) -> ReviewEntry:
    selected = selection or frozenset()
    return ReviewEntry(
        question=question,
        selected=selected,
        answer=question.answer_set,
        correct=is_correct(question, selection),
        options=tuple(
            OptionReview(
                text=text,
                is_answer=index in question.answer_set,
                is_selected=index in selected,
            )
            for index, text in enumerate(question.options)
        ),
    )


def grade(attempt: AttemptState) -> GradeReport:
    """Grade a submitted attempt. Unanswered questions count as incorrect."""
    if not attempt.is_submitted():
        raise ExamNotSubmittedError("The exam must be submitted before it can be graded.")

    entries = tuple(
        review_question(question, attempt.selection_for(question.id))
        for question in attempt.questions
    )
    return GradeReport(
        score=sum(1 for entry in entries if entry.correct),
        total=len(entries),
        entries=entries,
        time_remaining=attempt.time_remaining,
    )
