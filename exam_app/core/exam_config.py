"""Configuration consumed when an exam session starts."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from exam_app.constants.exam_constants import (
    DEFAULT_BANK_PATH,
    DEFAULT_DURATION_SECONDS,
    DEFAULT_SAMPLE_SIZE,
    URGENT_THRESHOLD_SECONDS,
    WARN_THRESHOLD_SECONDS,
)


@dataclass(frozen=True, slots=True)
class ExamConfig:
    """Settings for one exam attempt. ``sample_size=None`` uses the whole bank."""

    duration_seconds: int = DEFAULT_DURATION_SECONDS
    sample_size: int | None = DEFAULT_SAMPLE_SIZE
    warn_threshold_seconds: int = WARN_THRESHOLD_SECONDS
    urgent_threshold_seconds: int = URGENT_THRESHOLD_SECONDS
    shuffle_seed: int | None = None
    bank_path: Path = field(default=DEFAULT_BANK_PATH)

    def __post_init__(self) -> None:
        if not isinstance(self.duration_seconds, int) or self.duration_seconds <= 0:
            raise ValueError("Exam duration must be a positive integer number of seconds.")
        if self.sample_size is not None and (
            not isinstance(self.sample_size, int) or self.sample_size <= 0
        ):
            raise ValueError("Sample size must be a positive integer or None for the full bank.")
        if self.warn_threshold_seconds < 0 or self.urgent_threshold_seconds < 0:
            raise ValueError("Timer thresholds cannot be negative.")
        if self.urgent_threshold_seconds > self.warn_threshold_seconds:
            raise ValueError("The urgent threshold cannot exceed the warning threshold.")

    @classmethod
    def from_cli_values(
        cls,
        *,
        bank_path: Path | None = None,
        duration_seconds: int | None = None,
        sample_size: int | None = None,
        shuffle_seed: int | None = None,
    ) -> "ExamConfig":
        """Build a config from optional command-line overrides.

        A ``sample_size`` of 0 on the command line selects the whole bank.
        """
        defaults = cls()
        if sample_size is None:
            resolved_sample = defaults.sample_size
        elif sample_size == 0:
            resolved_sample = None
        else:
            resolved_sample = sample_size
        return cls(
            duration_seconds=duration_seconds if duration_seconds is not None else defaults.duration_seconds,
            sample_size=resolved_sample,
            shuffle_seed=shuffle_seed,
            bank_path=bank_path if bank_path is not None else defaults.bank_path,
        )
