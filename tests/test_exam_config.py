from pathlib import Path

import pytest

from exam_app.constants.exam_constants import DEFAULT_BANK_PATH, DEFAULT_DURATION_SECONDS
from exam_app.core.exam_config import ExamConfig


def test_defaults():
    config = ExamConfig()
    assert config.duration_seconds == DEFAULT_DURATION_SECONDS == 105 * 60
    assert config.sample_size == 60
    assert config.warn_threshold_seconds == 300
    assert config.urgent_threshold_seconds == 30
    assert config.bank_path == DEFAULT_BANK_PATH


def test_default_bank_ships_with_the_package():
    assert DEFAULT_BANK_PATH.is_file()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"duration_seconds": 0},
        {"duration_seconds": -1},
        {"sample_size": 0},
        {"sample_size": -4},
        {"warn_threshold_seconds": 10, "urgent_threshold_seconds": 20},
        {"urgent_threshold_seconds": -1},
    ],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        ExamConfig(**kwargs)


def test_cli_values_override_defaults(tmp_path: Path):
    bank = tmp_path / "bank.json"
    config = ExamConfig.from_cli_values(bank_path=bank, duration_seconds=90, sample_size=5, shuffle_seed=3)
    assert config.bank_path == bank
    assert config.duration_seconds == 90
    assert config.sample_size == 5
    assert config.shuffle_seed == 3


def test_cli_sample_size_zero_means_whole_bank():
    assert ExamConfig.from_cli_values(sample_size=0).sample_size is None
    assert ExamConfig.from_cli_values().sample_size == 60
