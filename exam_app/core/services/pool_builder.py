"""Service that turns a raw question bank into a shuffled exam pool."""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Mapping, Sequence

from exam_app.core.models import MalformedQuestionError, Question, QuestionKind
from exam_app.core.randomizer import Randomizer

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "question", "options", "answer", "type")


class PoolBuilder:
    """Samples questions from a bank and shuffles their options."""

    def __init__(self, randomizer: Randomizer | None = None) -> None:
        self._randomizer = randomizer or Randomizer()

    def build_pool(
        self,
        raw_bank: Sequence[Mapping[str, Any]],
        sample_size: int | None = None,
    ) -> list[Question]:
        """Return the ordered questions for one attempt.

        The whole bank is validated first so that a malformed record aborts the
        build before any question is handed out. The bank is then shuffled and
        truncated to ``sample_size`` questions, which yields a uniformly random
        subset in random order. A missing or non-positive ``sample_size`` keeps
        the entire bank.
        """
        questions = [self._parse_record(position, record) for position, record in enumerate(raw_bank)]
        self._ensure_unique_ids(questions)

        pool = self._randomizer.shuffle(questions)
        if isinstance(sample_size, int) and sample_size > 0:
            pool = pool[: min(sample_size, len(pool))]

        shuffled = [self.shuffle_options(question) for question in pool]
        logger.info("Built exam pool of %d question(s) from a bank of %d.", len(shuffled), len(questions))
        return shuffled

    def shuffle_options(self, question: Question) -> Question:
        """Shuffle the options of ``question`` and remap its answer indices."""
        paired = list(enumerate(question.options))
        self._randomizer.shuffle(paired, in_place=True)

        options = tuple(text for _, text in paired)
        index_map = {original: new for new, (original, _) in enumerate(paired)}
        answer_set = frozenset(index_map[original] for original in question.answer_set)
        return replace(question, options=options, answer_set=answer_set)

    @staticmethod
    def _parse_record(position: int, record: Mapping[str, Any]) -> Question:
        if not isinstance(record, Mapping):
            raise MalformedQuestionError(f"Bank entry #{position + 1} is not an object.")
        missing = [name for name in _REQUIRED_FIELDS if name not in record]
        if missing:
            raise MalformedQuestionError(
                f"Bank entry #{position + 1} is missing field(s): {', '.join(missing)}."
            )

        question_id = record["id"]
        if isinstance(question_id, bool) or not isinstance(question_id, (int, str)):
            raise MalformedQuestionError(
                f"Bank entry #{position + 1} id must be an integer or a string."
            )
        prompt = record["question"]
        if not isinstance(prompt, str):
            raise MalformedQuestionError(f"Question {question_id!r} text must be a string.")

        raw_options = record["options"]
        if isinstance(raw_options, (str, bytes)) or not isinstance(raw_options, Sequence):
            raise MalformedQuestionError(f"Question {question_id!r} options must be a list.")
        if any(not isinstance(option, str) for option in raw_options):
            raise MalformedQuestionError(f"Question {question_id!r} options must be strings.")

        raw_answer = record["answer"]
        if isinstance(raw_answer, (str, bytes)) or not isinstance(raw_answer, Sequence):
            raise MalformedQuestionError(f"Question {question_id!r} answer must be a list of indices.")
        if any(isinstance(index, bool) or not isinstance(index, int) for index in raw_answer):
            raise MalformedQuestionError(f"Question {question_id!r} answer indices must be integers.")

        try:
            kind = QuestionKind(record["type"])
        except ValueError as exc:
            raise MalformedQuestionError(
                f"Question {question_id!r} has unknown type {record['type']!r}."
            ) from exc

        return Question(
            id=question_id,
            prompt=prompt,
            options=tuple(raw_options),
            answer_set=frozenset(raw_answer),
            kind=kind,
        )

    @staticmethod
    def _ensure_unique_ids(questions: list[Question]) -> None:
        seen: set[object] = set()
        for question in questions:
            if question.id in seen:
                raise MalformedQuestionError(f"Duplicate question id {question.id!r} in bank.")
            seen.add(question.id)
