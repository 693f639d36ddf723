"""Component showing the current exam question and its options."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QAbstractButton,
    QButtonGroup,
    QCheckBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.ui_constants import (
    NEXT_BUTTON,
    PREV_BUTTON,
    QUESTION_COUNTER_TEMPLATE,
    SUBMIT_BUTTON,
)
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import QuestionId, QuestionKind, QuestionView
from exam_app.styling.styles import Styles
from exam_app.ui.question_renderer import render_question_prompt


class QuestionPanel(QWidget):
    """UI component for answering questions and moving between them."""

    def __init__(
        self,
        exam_manager: ExamManager,
        on_submit_requested: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.exam_manager = exam_manager
        self.on_submit_requested = on_submit_requested

        self._font_size: int = 14
        self._rendered_question_id: QuestionId | None = None
        self._option_buttons: list[QAbstractButton] = []
        self._button_group: QButtonGroup | None = None
        self._locked = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.counter_label = QLabel("", self)
        self.counter_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.counter_label)
        header_row.addStretch()
        self.answered_label = QLabel("", self)
        header_row.addWidget(self.answered_label)
        layout.addLayout(header_row)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        self.prompt_view = QWebEngineView(self)
        layout.addWidget(self.prompt_view, stretch=2)

        self.options_group = QGroupBox("Options", self)
        self.options_layout = QVBoxLayout()
        self.options_group.setLayout(self.options_layout)
        layout.addWidget(self.options_group, stretch=1)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)

        self.next_button = QPushButton(NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)

        nav_row.addStretch()

        self.submit_button = QPushButton(SUBMIT_BUTTON, self)
        self.submit_button.setObjectName("submitButton")
        self.submit_button.clicked.connect(self._handle_submit)
        nav_row.addWidget(self.submit_button)
        layout.addLayout(nav_row)

    def show_view(self, view: QuestionView) -> None:
        """Render ``view``; the prompt is only reloaded when the question changes."""
        question = view.question
        if question.id != self._rendered_question_id:
            self.prompt_view.setHtml(render_question_prompt(question.prompt, self._font_size))
            self._rebuild_option_buttons(view)
            self._rendered_question_id = question.id
        else:
            self._sync_option_buttons(view.selection)

        self.counter_label.setText(
            QUESTION_COUNTER_TEMPLATE.format(number=view.position + 1, total=view.total)
        )
        self.answered_label.setText(f"Answered: {view.answered_count}/{view.total}")
        self.progress_bar.setValue(int(view.progress * 1000))
        self._update_nav_buttons(view)

    def set_locked(self, locked: bool) -> None:
        """Disable answering and navigation, e.g. while the timer is paused."""
        self._locked = locked
        for button in self._option_buttons:
            button.setEnabled(not locked)
        self.submit_button.setEnabled(not locked)
        if self.exam_manager.has_exam() and not self.exam_manager.is_submitted():
            self._update_nav_buttons(self.exam_manager.current_view())

    def reset(self) -> None:
        self._rendered_question_id = None

    def _rebuild_option_buttons(self, view: QuestionView) -> None:
        while self.options_layout.count():
            item = self.options_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        question = view.question
        multi = question.kind is QuestionKind.MULTI
        self._button_group = QButtonGroup(self)
        self._button_group.setExclusive(not multi)
        self._option_buttons = []
        for index, text in enumerate(question.options):
            label = f"{chr(ord('A') + index)}. {text}"
            button: QAbstractButton = QCheckBox(label, self) if multi else QRadioButton(label, self)
            button.setChecked(index in view.selection)
            button.setEnabled(not self._locked)
            button.toggled.connect(self._handle_option_toggled)
            self._button_group.addButton(button, index)
            self.options_layout.addWidget(button)
            self._option_buttons.append(button)
        self.options_layout.addStretch()
        self.options_group.setTitle("Select all that apply" if multi else "Select one answer")

    def _sync_option_buttons(self, selection: frozenset[int]) -> None:
        exclusive = self._button_group is not None and self._button_group.exclusive()
        if self._button_group is not None and exclusive:
            # An exclusive group refuses to uncheck its last checked button.
            self._button_group.setExclusive(False)
        for index, button in enumerate(self._option_buttons):
            button.blockSignals(True)
            button.setChecked(index in selection)
            button.blockSignals(False)
        if self._button_group is not None and exclusive:
            self._button_group.setExclusive(True)

    def _selected_indices(self) -> list[int]:
        return [index for index, button in enumerate(self._option_buttons) if button.isChecked()]

    def _handle_option_toggled(self, _checked: bool) -> None:
        if self._rendered_question_id is None or self.exam_manager.is_submitted():
            return
        self.exam_manager.record_answer(self._rendered_question_id, self._selected_indices())

    def _handle_previous(self) -> None:
        self.show_view(self.exam_manager.previous_question(self._selected_indices()))

    def _handle_next(self) -> None:
        self.show_view(self.exam_manager.next_question(self._selected_indices()))

    def _handle_submit(self) -> None:
        self.on_submit_requested(self._selected_indices())

    def _update_nav_buttons(self, view: QuestionView) -> None:
        self.prev_button.setEnabled(not self._locked and not view.is_first)
        self.next_button.setEnabled(not self._locked and not view.is_last)
