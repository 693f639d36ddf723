"""Component for the graded review shown after submission."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from exam_app.constants.ui_constants import RETAKE_BUTTON, SCORE_TEMPLATE
from exam_app.core.models import GradeReport
from exam_app.styling.styles import Styles
from exam_app.ui.question_renderer import render_review_document


class ReviewPanel(QWidget):
    """Shows the score and the per-question review of a submitted exam."""

    def __init__(self, on_retake: callable, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_retake = on_retake
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.score_label = QLabel("", self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.score_label)
        header_row.addStretch()

        self.retake_button = QPushButton(RETAKE_BUTTON, self)
        self.retake_button.clicked.connect(lambda: self.on_retake())
        header_row.addWidget(self.retake_button)
        layout.addLayout(header_row)

        self.review_view = QWebEngineView(self)
        layout.addWidget(self.review_view, stretch=1)

    def show_report(self, report: GradeReport) -> None:
        score_text = SCORE_TEMPLATE.format(score=report.score, total=report.total)
        self.score_label.setText(f"{score_text} ({report.percentage:.0f}%)")
        self.review_view.setHtml(render_review_document(report))
