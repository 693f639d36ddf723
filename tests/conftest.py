from __future__ import annotations

from threading import RLock
import time
from typing import Callable, Sequence

import pytest

from exam_app.core.randomizer import Randomizer


class ManualTickSource:
    """Tick source driven by the test instead of a clock."""

    def __init__(self, callback: Callable[[], None], guard=None) -> None:
        self.callback = callback
        self.guard = guard if guard is not None else RLock()
        self.active = False
        self.start_calls = 0

    def start(self) -> None:
        self.start_calls += 1
        self.active = True

    def stop(self) -> None:
        self.active = False

    def is_active(self) -> bool:
        return self.active

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            with self.guard:
                if self.active:
                    self.callback()


class ManualTickFactory:
    """Factory that remembers every tick source it created."""

    def __init__(self) -> None:
        self.sources: list[ManualTickSource] = []

    def __call__(self, callback: Callable[[], None], *, guard=None) -> ManualTickSource:
        source = ManualTickSource(callback, guard)
        self.sources.append(source)
        return source

    @property
    def latest(self) -> ManualTickSource:
        return self.sources[-1]


class ScriptedRandomizer(Randomizer):
    """Applies queued permutations; falls back to the identity when the queue is empty.

    A permutation lists source positions: ``[2, 0, 1]`` turns ``[a, b, c]``
    into ``[c, a, b]``.
    """

    def __init__(self, permutations: Sequence[Sequence[int] | None] = ()) -> None:
        super().__init__(seed=0)
        self._queue = list(permutations)
        self.calls = 0

    def shuffle(self, items, *, in_place=False):
        self.calls += 1
        permutation = self._queue.pop(0) if self._queue else None
        source = list(items)
        result = source if permutation is None else [source[index] for index in permutation]
        if in_place:
            items[:] = result
            return items
        return result


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def make_record(question_id, options, answer, kind="single", text=None):
    return {
        "id": question_id,
        "question": text or f"Question {question_id}?",
        "options": list(options),
        "answer": list(answer),
        "type": kind,
    }


@pytest.fixture
def tick_factory() -> ManualTickFactory:
    return ManualTickFactory()


@pytest.fixture
def sample_bank() -> list[dict]:
    return [
        make_record(1, ["A", "B", "C"], [2]),
        make_record(2, ["red", "green", "blue", "yellow"], [0, 2], kind="multi"),
        make_record(3, ["yes", "no"], [0]),
        make_record(4, ["1", "2", "3", "4"], [3]),
        make_record(5, ["north", "south", "east", "west"], [1, 2, 3], kind="multi"),
    ]
