"""Utilities for loading a question bank from a JSON file.

File format: a JSON list of question objects, or an object whose
``questions`` key holds that list::

    [
      {
        "id": 1,
        "question": "What is $2 + 2$?",
        "options": ["3", "4", "5", "22"],
        "answer": [1],
        "type": "single"
      }
    ]

``answer`` holds zero-based indices into ``options``. Only the overall shape is
checked here; the rules for individual questions are enforced when the exam
pool is built so that every source of questions goes through the same checks.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class BankLoadError(Exception):
    """Raised when a question bank cannot be read."""


@dataclass(slots=True)
class LoadedBank:
    """Container for the raw records of a question bank and where they came from."""

    source_path: Path
    records: list[dict[str, Any]]


def load_bank_from_file(file_path: Path) -> LoadedBank:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BankLoadError(f"Unable to read question bank '{file_path}': {exc}") from exc
    records = parse_bank_text(text)
    logger.info("Loaded %d question(s) from %s", len(records), file_path)
    return LoadedBank(source_path=file_path, records=records)


def parse_bank_text(text: str) -> list[dict[str, Any]]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise BankLoadError(f"Question bank is not valid JSON: {exc.msg} (line {exc.lineno}).") from exc

    if isinstance(payload, dict):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise BankLoadError("Question bank must be a list of questions.")
    if not payload:
        raise BankLoadError("Question bank did not contain any questions.")
    if any(not isinstance(record, dict) for record in payload):
        raise BankLoadError("Every question in the bank must be a JSON object.")
    return payload
