"""Static metadata describing ExamQt."""

APP_NAME = "ExamQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ExamQt runs timed multiple-choice practice exams. Questions and options are "
    "shuffled on every attempt, and the exam is submitted automatically when time runs out."
)

HELP_TEXT = (
    "Question banks are JSON files containing a list of questions:\n\n"
    '[{"id": 1, "question": "What is $2 + 2$?", "options": ["3", "4", "5"],\n'
    '  "answer": [1], "type": "single"}]\n\n'
    "Use \"type\": \"multi\" and several answer indices for questions with more than one "
    "correct option. Answer indices are zero-based positions in the options list."
)
