import pytest

from conftest import ScriptedRandomizer, make_record
from exam_app.core.models import MalformedQuestionError, QuestionKind
from exam_app.core.randomizer import Randomizer
from exam_app.core.services.pool_builder import PoolBuilder


def test_option_shuffle_remaps_answer_index():
    # Bank order stays as is, then options [A, B, C] become [C, A, B].
    builder = PoolBuilder(ScriptedRandomizer([None, [2, 0, 1]]))
    [question] = builder.build_pool([make_record("q1", ["A", "B", "C"], [2])])

    assert question.options == ("C", "A", "B")
    assert question.answer_set == frozenset({0})
    assert question.kind is QuestionKind.SINGLE
    assert question.prompt == "Question q1?"


def test_multi_answer_remapping_follows_option_text():
    builder = PoolBuilder(ScriptedRandomizer([None, [3, 1, 0, 2]]))
    [question] = builder.build_pool(
        [make_record(9, ["w", "x", "y", "z"], [0, 2], kind="multi")]
    )
    assert question.options == ("z", "x", "w", "y")
    assert question.answer_set == frozenset({2, 3})


def test_correct_texts_survive_random_shuffles(sample_bank):
    originals = {
        record["id"]: {record["options"][index] for index in record["answer"]}
        for record in sample_bank
    }
    builder = PoolBuilder(Randomizer(seed=99))
    for _ in range(50):
        for question in builder.build_pool(sample_bank):
            assert question.correct_options == originals[question.id]


def test_sampling_returns_unique_questions_from_bank(sample_bank):
    builder = PoolBuilder(Randomizer(seed=1))
    bank_ids = {record["id"] for record in sample_bank}
    for size in range(1, len(sample_bank) + 1):
        pool = builder.build_pool(sample_bank, sample_size=size)
        ids = [question.id for question in pool]
        assert len(ids) == size
        assert len(set(ids)) == size
        assert set(ids) <= bank_ids


def test_sample_larger_than_bank_uses_whole_bank(sample_bank):
    pool = PoolBuilder(Randomizer(seed=2)).build_pool(sample_bank, sample_size=50)
    assert len(pool) == len(sample_bank)


@pytest.mark.parametrize("sample_size", [None, 0, -3])
def test_missing_or_non_positive_sample_uses_whole_bank(sample_bank, sample_size):
    pool = PoolBuilder(Randomizer(seed=2)).build_pool(sample_bank, sample_size=sample_size)
    assert sorted(question.id for question in pool) == [1, 2, 3, 4, 5]


def test_sampling_truncates_after_shuffling_the_bank(sample_bank):
    builder = PoolBuilder(ScriptedRandomizer([[4, 2, 0, 1, 3]]))
    pool = builder.build_pool(sample_bank, sample_size=2)
    assert [question.id for question in pool] == [5, 3]


def test_build_does_not_mutate_the_bank(sample_bank):
    snapshot = [dict(record, options=list(record["options"])) for record in sample_bank]
    PoolBuilder(Randomizer(seed=4)).build_pool(sample_bank, sample_size=3)
    assert sample_bank == snapshot


@pytest.mark.parametrize(
    "record",
    [
        make_record(1, ["only"], [0]),
        make_record(1, ["a", "b"], [2]),
        make_record(1, ["a", "b"], [-1]),
        make_record(1, ["a", "b"], []),
        make_record(1, ["a", "b", "c"], [0, 1], kind="single"),
        make_record(1, ["a", "b"], [0], kind="essay"),
        make_record(1, ["a", 2], [0]),
        make_record(1, ["a", "b"], ["0"]),
        {"id": 1, "question": "Options as text", "options": "ab", "answer": [0], "type": "single"},
        {"id": 1, "question": "Missing options", "answer": [0], "type": "single"},
        "not a record",
    ],
)
def test_malformed_records_are_rejected(record):
    with pytest.raises(MalformedQuestionError):
        PoolBuilder(Randomizer(seed=0)).build_pool([make_record(0, ["x", "y"], [0]), record])


def test_malformed_record_outside_sample_still_fails_the_build():
    bank = [make_record(index, ["x", "y"], [0]) for index in range(5)]
    bank.append(make_record(99, ["x"], [0]))
    with pytest.raises(MalformedQuestionError):
        PoolBuilder(Randomizer(seed=0)).build_pool(bank, sample_size=1)


def test_duplicate_ids_are_rejected():
    bank = [make_record(1, ["x", "y"], [0]), make_record(1, ["p", "q"], [1])]
    with pytest.raises(MalformedQuestionError, match="Duplicate"):
        PoolBuilder().build_pool(bank)


def test_duplicate_answer_indices_collapse():
    [question] = PoolBuilder(ScriptedRandomizer()).build_pool(
        [make_record(1, ["x", "y"], [1, 1])]
    )
    assert question.answer_set == frozenset({1})
