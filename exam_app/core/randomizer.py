"""Shuffle primitive shared by question sampling and option shuffling."""

from __future__ import annotations

import random
from typing import MutableSequence, Sequence, TypeVar

T = TypeVar("T")


class Randomizer:
    """Uniform Fisher-Yates shuffling backed by a seedable random source."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def seed(self, seed: int | None) -> None:
        self._rng.seed(seed)

    def shuffle(self, items: Sequence[T], *, in_place: bool = False) -> list[T]:
        """Return a uniformly random permutation of ``items``.

        With ``in_place=True`` the given list is permuted and returned;
        otherwise a shuffled copy is returned and ``items`` is left untouched.
        """
        if in_place:
            if not isinstance(items, MutableSequence):
                raise TypeError("In-place shuffling requires a mutable sequence.")
            target = items
        else:
            target = list(items)
        self._rng.shuffle(target)
        return target  # type: ignore[return-value]
