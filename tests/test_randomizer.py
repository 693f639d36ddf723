from collections import Counter
from itertools import permutations

import pytest

from exam_app.core.randomizer import Randomizer


def test_shuffle_returns_permutation_and_keeps_input():
    items = ["a", "b", "c", "d", "e"]
    shuffled = Randomizer(seed=3).shuffle(items)
    assert sorted(shuffled) == sorted(items)
    assert items == ["a", "b", "c", "d", "e"]
    assert shuffled is not items


def test_shuffle_in_place_mutates_given_list():
    items = list(range(10))
    result = Randomizer(seed=5).shuffle(items, in_place=True)
    assert result is items
    assert sorted(items) == list(range(10))


def test_in_place_requires_mutable_sequence():
    with pytest.raises(TypeError):
        Randomizer().shuffle((1, 2, 3), in_place=True)


def test_same_seed_gives_same_order():
    first = Randomizer(seed=42).shuffle(range(20))
    second = Randomizer(seed=42).shuffle(range(20))
    assert first == second


def test_reseeding_restarts_sequence():
    randomizer = Randomizer(seed=7)
    first = randomizer.shuffle(range(8))
    randomizer.seed(7)
    assert randomizer.shuffle(range(8)) == first


def test_every_permutation_is_reachable_with_similar_frequency():
    randomizer = Randomizer(seed=1234)
    counts = Counter(tuple(randomizer.shuffle("abc")) for _ in range(6000))
    assert set(counts) == set(permutations("abc"))
    # 1000 expected per permutation; the bound is loose enough to never flake with a fixed seed.
    assert all(800 < count < 1200 for count in counts.values())
