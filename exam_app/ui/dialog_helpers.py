"""Message boxes used by the exam window."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def _ask_yes_no(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_submit_exam(parent: QWidget, unanswered_count: int) -> bool:
    """Ask the candidate to confirm submitting the exam.

    Args:
        parent: Parent widget for the dialog
        unanswered_count: Number of questions without a selection

    Returns:
        True if the candidate confirmed, False otherwise
    """
    message = "Submit your exam now? You cannot change your answers afterwards."
    if unanswered_count:
        message = f"{unanswered_count} question(s) are unanswered. {message}"
    return _ask_yes_no(parent, "Confirm Submit", message)


def confirm_restart_exam(parent: QWidget) -> bool:
    """Ask before abandoning a running exam for a new attempt."""
    return _ask_yes_no(
        parent,
        "Confirm New Attempt",
        "Starting a new attempt discards your current answers. Continue?",
    )


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)
