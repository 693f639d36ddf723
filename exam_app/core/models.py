"""Domain models for the exam application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

QuestionId = int | str


class MalformedQuestionError(ValueError):
    """Raised when a question violates the option/answer rules."""


class QuestionKind(str, Enum):
    """How many options a question expects the user to pick."""

    SINGLE = "single"
    MULTI = "multi"


class AttemptStatus(Enum):
    """Lifecycle of an exam attempt. SUBMITTED is terminal."""

    IN_PROGRESS = auto()
    SUBMITTED = auto()


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with one or more correct options."""

    id: QuestionId
    prompt: str
    options: tuple[str, ...]
    answer_set: frozenset[int]
    kind: QuestionKind

    def __post_init__(self) -> None:
        if len(self.options) < 2:
            raise MalformedQuestionError(
                f"Question {self.id!r} must have at least two options."
            )
        if not self.answer_set:
            raise MalformedQuestionError(f"Question {self.id!r} has no correct answer.")
        for index in self.answer_set:
            if not 0 <= index < len(self.options):
                raise MalformedQuestionError(
                    f"Question {self.id!r} references answer index {index} "
                    f"outside of its {len(self.options)} options."
                )
        if self.kind is QuestionKind.SINGLE and len(self.answer_set) != 1:
            raise MalformedQuestionError(
                f"Single-choice question {self.id!r} must have exactly one answer."
            )

    @property
    def correct_options(self) -> frozenset[str]:
        return frozenset(self.options[index] for index in self.answer_set)


@dataclass(frozen=True, slots=True)
class QuestionView:
    """Snapshot of the current question handed to presentation."""

    question: Question
    selection: frozenset[int]
    position: int
    total: int
    answered_count: int = 0

    @property
    def progress(self) -> float:
        return (self.position + 1) / self.total

    @property
    def is_first(self) -> bool:
        return self.position == 0

    @property
    def is_last(self) -> bool:
        return self.position == self.total - 1


@dataclass(frozen=True, slots=True)
class TimerTick:
    """Remaining time reported by the countdown on every tick."""

    remaining: int
    warn: bool
    urgent: bool
    expired: bool = False

    @property
    def formatted(self) -> str:
        minutes, seconds = divmod(max(0, self.remaining), 60)
        return f"{minutes:02d}:{seconds:02d}"


@dataclass(frozen=True, slots=True)
class OptionReview:
    """Per-option flags shown on the review page."""

    text: str
    is_answer: bool
    is_selected: bool

    @property
    def correct(self) -> bool:
        return self.is_answer

    @property
    def wrong(self) -> bool:
        return self.is_selected and not self.is_answer

    @property
    def user_selected(self) -> bool:
        return self.is_selected


@dataclass(frozen=True, slots=True)
class ReviewEntry:
    """Graded outcome of a single question."""

    question: Question
    selected: frozenset[int]
    answer: frozenset[int]
    correct: bool
    options: tuple[OptionReview, ...]

    @property
    def selection_summary(self) -> str:
        if not self.selected:
            return "No selection"
        return ", ".join(self.question.options[index] for index in sorted(self.selected))


@dataclass(frozen=True, slots=True)
class GradeReport:
    """Immutable result of grading a submitted attempt."""

    score: int
    total: int
    entries: tuple[ReviewEntry, ...]
    time_remaining: int = 0

    @property
    def percentage(self) -> float:
        if not self.total:
            return 0.0
        return (self.score / self.total) * 100
