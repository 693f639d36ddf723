"""Exam-related constants shared across UI and core layers."""

from pathlib import Path

DEFAULT_DURATION_SECONDS: int = 105 * 60
DEFAULT_SAMPLE_SIZE: int | None = 60
WARN_THRESHOLD_SECONDS: int = 5 * 60
URGENT_THRESHOLD_SECONDS: int = 30
TICK_INTERVAL_MS: int = 1000
DEFAULT_BANK_PATH: Path = Path(__file__).resolve().parents[1] / "data" / "questions.json"
