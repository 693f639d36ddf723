"""HTML rendering for exam questions and the post-submission review."""

from __future__ import annotations

from exam_app.constants.ui_constants import RETAKE_HINT, SCORE_TEMPLATE
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import GradeReport, ReviewEntry

_REVIEW_CSS = """
      .review-score { margin: 0.5rem 0 1rem; }
      .review-item { margin-bottom: 1.5rem; }
      .option-line { padding: 4px 8px; margin: 2px 0; border-radius: 4px; border: 1px solid transparent; }
      .option-line.correct { background: #dcfce7; border-color: #16a34a; }
      .option-line.wrong { background: #fee2e2; border-color: #dc2626; }
      .option-line.user-selected { font-weight: bold; }
      .selection-summary { margin-top: 8px; color: #555; }
"""


def render_question_prompt(prompt: str, font_size: int = 14) -> str:
    """Render a question prompt as a full HTML document for the web view."""
    return renderer.render_full_document(prompt or "(No question text)", font_size=font_size)


def option_css_classes(entry: ReviewEntry, index: int) -> list[str]:
    """CSS classes for one option on the review page; the flags can overlap."""
    option = entry.options[index]
    classes = ["option-line"]
    if option.correct:
        classes.append("correct")
    if option.wrong:
        classes.append("wrong")
    if option.user_selected:
        classes.append("user-selected")
    return classes


def render_review_fragment(report: GradeReport) -> str:
    parts = [
        f'<div class="review-score"><h2>{SCORE_TEMPLATE.format(score=report.score, total=report.total)}</h2></div>'
    ]
    for number, entry in enumerate(report.entries, start=1):
        parts.append('<div class="review-item">')
        parts.append(f"<h3>Question {number}</h3>")
        parts.append(renderer.render_fragment(entry.question.prompt))
        for index, option in enumerate(entry.options):
            classes = " ".join(option_css_classes(entry, index))
            parts.append(f'<div class="{classes}">{renderer.render_inline(option.text)}</div>')
        summary = renderer.render_inline(entry.selection_summary)
        parts.append(f'<div class="selection-summary"><small>Your selection: {summary}</small></div>')
        parts.append("</div>")
    parts.append(f'<div class="review-score"><p>{RETAKE_HINT}</p></div>')
    return "\n".join(parts)


def render_review_document(report: GradeReport, font_size: int = 12) -> str:
    """Render the graded review as a full HTML document for the web view."""
    return renderer.wrap_with_mathjax(
        render_review_fragment(report),
        title="Exam review",
        font_size=font_size,
        extra_css=_REVIEW_CSS,
    )
