"""Application entry point for ExamQt."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.bank_loader import BankLoadError, load_bank_from_file
from exam_app.core.exam_config import ExamConfig
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import MalformedQuestionError
from exam_app.utils.logging_config import configure_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a timed multiple-choice exam.")
    parser.add_argument("--bank", type=Path, default=None, help="Path to a JSON question bank")
    parser.add_argument("--duration", type=int, default=None, help="Exam duration in seconds")
    parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Number of questions per attempt (0 = whole bank)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible shuffling")
    parser.add_argument("--host", default=DEFAULT_HOST, help="API host (default %(default)s)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="API port (default %(default)s)")
    parser.add_argument("--no-api", action="store_true", help="Do not start the JSON API")
    parser.add_argument("--headless", action="store_true", help="Serve the API only, without the Qt window")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, start the exam, then launch the Qt UI and/or the API server."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logger = configure_logging()
    logger.info("Starting ExamQt…")

    try:
        config = ExamConfig.from_cli_values(
            bank_path=args.bank,
            duration_seconds=args.duration,
            sample_size=args.sample_size,
            shuffle_seed=args.seed,
        )
        bank = load_bank_from_file(config.bank_path)
    except (ValueError, BankLoadError) as exc:
        logger.error("%s", exc)
        sys.exit(2)

    if args.headless:
        from exam_app.server.api_server import run_api_server

        exam_manager = ExamManager(config)
        _start_or_exit(exam_manager, bank.records, logger)
        logger.info("Exam API available at http://%s:%d/exam", args.host, args.port)
        run_api_server(exam_manager, host=args.host, port=args.port)
        return

    from PySide6.QtWidgets import QApplication

    from exam_app.server.api_server import start_api_server
    from exam_app.ui.exam_main_window import ExamMainWindow

    app = QApplication(sys.argv[:1])
    exam_manager = ExamManager(config)
    _start_or_exit(exam_manager, bank.records, logger)

    api_url = None
    if not args.no_api:
        start_api_server(exam_manager, host=args.host, port=args.port)
        api_url = f"http://{args.host}:{args.port}/exam"
        logger.info("Exam API available at %s", api_url)

    window = ExamMainWindow(exam_manager=exam_manager, api_url=api_url)
    window.show()
    sys.exit(app.exec())


def _start_or_exit(exam_manager: ExamManager, records: list[dict], logger) -> None:
    try:
        exam_manager.start_exam(records)
    except MalformedQuestionError as exc:
        logger.error("Question bank rejected: %s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
