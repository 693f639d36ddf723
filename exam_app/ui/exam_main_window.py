"""Qt main window running an exam attempt and showing its review."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.about import APP_NAME, APP_VERSION
from exam_app.constants.ui_constants import (
    LOAD_BANK_BUTTON,
    LOAD_DIALOG_TITLE,
    LOAD_FILE_FILTER,
    PAUSE_BUTTON,
    PAUSED_MESSAGE,
    RESUME_BUTTON,
    STATE_REFRESH_INTERVAL_MS,
    TIME_UP_MESSAGE,
    TIMER_LABEL_TEMPLATE,
    WINDOW_TITLE,
)
from exam_app.core.bank_loader import BankLoadError, load_bank_from_file
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import MalformedQuestionError
from exam_app.styling.styles import Styles
from exam_app.ui.components.question_panel import QuestionPanel
from exam_app.ui.components.review_panel import ReviewPanel
from exam_app.ui.dialog_helpers import (
    confirm_restart_exam,
    confirm_submit_exam,
    show_error,
    show_info,
)

logger = logging.getLogger(__name__)


class ExamMode(Enum):
    """High-level UI mode for the exam window."""

    ANSWERING = auto()
    REVIEW = auto()


class ExamMainWindow(QMainWindow):
    """Main Qt window switching between answering and reviewing.

    The window never changes exam state directly: it renders what the manager
    reports and forwards user intents. A refresh timer polls the manager so
    that submissions made by the countdown or through the API are picked up.
    """

    def __init__(self, exam_manager: ExamManager, api_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(f"{WINDOW_TITLE} {APP_VERSION}")

        self.exam_manager = exam_manager
        self.api_url = api_url
        self._mode = ExamMode.ANSWERING
        self._paused = False
        self._last_bank_dir: Path | None = None
        self._rendered_generation: int | None = None

        self._build_ui()
        self._configure_refresh_timer()
        self.setStyleSheet(Styles.get_main_window_style())
        self._refresh_state()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        top_row = QHBoxLayout()
        self.timer_label = QLabel("", self)
        top_row.addWidget(self.timer_label)

        self.pause_button = QPushButton(PAUSE_BUTTON, self)
        self.pause_button.clicked.connect(self._handle_pause_toggle)
        top_row.addWidget(self.pause_button)

        top_row.addStretch()

        if self.api_url:
            self.api_label = QLabel(f"API: {self.api_url}", self)
            top_row.addWidget(self.api_label)

        self.load_button = QPushButton(LOAD_BANK_BUTTON, self)
        self.load_button.clicked.connect(self._handle_load_bank)
        top_row.addWidget(self.load_button)
        root_layout.addLayout(top_row)

        self.status_label = QLabel("", self)
        self.status_label.setVisible(False)
        root_layout.addWidget(self.status_label)

        self.mode_stack = QStackedWidget(self)
        self.question_panel = QuestionPanel(
            self.exam_manager,
            on_submit_requested=self._handle_submit_requested,
            parent=self,
        )
        self.review_panel = ReviewPanel(on_retake=self._handle_retake, parent=self)
        self.mode_stack.addWidget(self.question_panel)
        self.mode_stack.addWidget(self.review_panel)
        root_layout.addWidget(self.mode_stack)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(STATE_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _set_mode(self, mode: ExamMode) -> None:
        self._mode = mode
        self.mode_stack.setCurrentWidget(
            self.question_panel if mode is ExamMode.ANSWERING else self.review_panel
        )
        self.pause_button.setEnabled(mode is ExamMode.ANSWERING)

    def _refresh_state(self) -> None:
        if not self.exam_manager.has_exam():
            self.timer_label.setText("")
            self.pause_button.setEnabled(False)
            return

        tick = self.exam_manager.time_snapshot()
        self.timer_label.setText(TIMER_LABEL_TEMPLATE.format(formatted=tick.formatted))
        self.timer_label.setStyleSheet(
            Styles.get_timer_label_style(tick, blink_state=(tick.remaining % 2 == 0))
        )

        if self.exam_manager.is_submitted():
            if self._mode is not ExamMode.REVIEW:
                self._show_review()
                if tick.expired:
                    show_info(self, "Time is up", TIME_UP_MESSAGE)
            return

        generation = self.exam_manager.get_attempt_generation()
        if generation != self._rendered_generation:
            self.question_panel.reset()
            self._rendered_generation = generation
        self._set_mode(ExamMode.ANSWERING)
        paused = not self.exam_manager.is_timer_running()
        if paused != self._paused:
            self._apply_paused(paused)
        self.question_panel.show_view(self.exam_manager.current_view())

    def _show_review(self) -> None:
        report = self.exam_manager.get_report()
        if report is None:
            return
        self._apply_paused(False)
        self.review_panel.show_report(report)
        self._set_mode(ExamMode.REVIEW)

    def _apply_paused(self, paused: bool) -> None:
        self._paused = paused
        self.pause_button.setText(RESUME_BUTTON if paused else PAUSE_BUTTON)
        self.question_panel.set_locked(paused)
        self.status_label.setText(PAUSED_MESSAGE if paused else "")
        self.status_label.setVisible(paused)

    def _handle_pause_toggle(self) -> None:
        if self._paused:
            self.exam_manager.resume_timer()
        else:
            self.exam_manager.pause_timer()
        self._refresh_state()

    def _handle_submit_requested(self, pending_selection: list[int]) -> None:
        view = self.exam_manager.current_view()
        unanswered = view.total - view.answered_count
        if pending_selection and not view.selection:
            unanswered -= 1
        if not confirm_submit_exam(self, max(0, unanswered)):
            return
        self.exam_manager.submit(pending_selection)
        self._refresh_state()

    def _handle_retake(self) -> None:
        try:
            self.exam_manager.restart_exam()
        except RuntimeError as exc:
            show_error(self, "Cannot start exam", str(exc))
            return
        self._set_mode(ExamMode.ANSWERING)
        self._refresh_state()

    def _handle_load_bank(self) -> None:
        if (
            self.exam_manager.has_exam()
            and not self.exam_manager.is_submitted()
            and not confirm_restart_exam(self)
        ):
            return

        start_dir = str(self._last_bank_dir or self.exam_manager.config.bank_path.parent)
        file_path_str, _ = QFileDialog.getOpenFileName(
            self,
            LOAD_DIALOG_TITLE,
            start_dir,
            LOAD_FILE_FILTER,
        )
        if not file_path_str:
            return

        file_path = Path(file_path_str)
        try:
            bank = load_bank_from_file(file_path)
            self.exam_manager.start_exam(bank.records)
        except (BankLoadError, MalformedQuestionError) as exc:
            logger.warning("Rejected question bank %s: %s", file_path, exc)
            show_error(self, "Invalid question bank", str(exc))
            return

        self._last_bank_dir = file_path.parent
        self._set_mode(ExamMode.ANSWERING)
        self._refresh_state()
        show_info(self, APP_NAME, f"Loaded {len(bank.records)} question(s) from {file_path.name}.")
