from exam_app.core.models import Question, QuestionKind
from exam_app.core.services.attempt_state import AttemptState
from exam_app.core.services.grader import grade
from exam_app.ui.question_renderer import (
    option_css_classes,
    render_question_prompt,
    render_review_document,
)


def _graded_report():
    question = Question(
        id=1,
        prompt="Which are *even*?",
        options=("2", "3", "4"),
        answer_set=frozenset({0, 2}),
        kind=QuestionKind.MULTI,
    )
    attempt = AttemptState([question])
    attempt.record_answer(1, [0, 1])
    attempt.submit()
    return grade(attempt)


def test_prompt_document_renders_markdown_and_loads_mathjax():
    html = render_question_prompt("What is **$2 + 2$**?")
    assert "<strong>$2 + 2$</strong>" in html
    assert "mathjax" in html.lower()


def test_option_classes_can_overlap():
    entry = _graded_report().entries[0]
    assert option_css_classes(entry, 0) == ["option-line", "correct", "user-selected"]
    assert option_css_classes(entry, 1) == ["option-line", "wrong", "user-selected"]
    assert option_css_classes(entry, 2) == ["option-line", "correct"]


def test_review_document_contains_score_and_selection_summary():
    html = render_review_document(_graded_report())
    assert "Your Score: 0/1" in html
    assert "<em>even</em>" in html
    assert "Your selection: 2, 3" in html


def test_review_escapes_raw_html_in_options():
    question = Question(
        id="x",
        prompt="Pick",
        options=("<script>alert(1)</script>", "safe"),
        answer_set=frozenset({1}),
        kind=QuestionKind.SINGLE,
    )
    attempt = AttemptState([question])
    attempt.submit()
    html = render_review_document(grade(attempt))
    assert "<script>alert(1)</script>" not in html
    assert "No selection" in html
