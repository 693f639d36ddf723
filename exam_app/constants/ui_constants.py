"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "ExamQt"
STATE_REFRESH_INTERVAL_MS: int = 250

QUESTION_COUNTER_TEMPLATE: str = "Question {number} of {total}"
TIMER_LABEL_TEMPLATE: str = "Time Left: {formatted}"
SCORE_TEMPLATE: str = "Your Score: {score}/{total}"
NO_SELECTION_TEXT: str = "No selection"

PREV_BUTTON: str = "Previous"
NEXT_BUTTON: str = "Next"
SUBMIT_BUTTON: str = "Submit Exam"
PAUSE_BUTTON: str = "Pause"
RESUME_BUTTON: str = "Resume"
RETAKE_BUTTON: str = "Retake Exam"
LOAD_BANK_BUTTON: str = "Load Question Bank"

LOAD_DIALOG_TITLE: str = "Select question bank"
LOAD_FILE_FILTER: str = "Question banks (*.json);;All files (*.*)"

PAUSED_MESSAGE: str = "Exam paused. Press Resume to continue."
RETAKE_HINT: str = "Questions and options are shuffled again on every attempt."
TIME_UP_MESSAGE: str = "Time is up. Your exam has been submitted."
