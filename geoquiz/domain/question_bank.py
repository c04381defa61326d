from typing import Dict, Sequence, Tuple

from .model import EmptyQuestionBankError, Question

# Display strings, looked up by key like the screen's string resources
STRINGS: Dict[str, str] = {
    "question_oceans": "The Pacific Ocean is larger than the Atlantic Ocean.",
    "question_mideast": "The Suez Canal connects the Red Sea and the Indian Ocean.",
    "question_africa": "The source of the Nile River is in Egypt.",
    "question_americas": "The Amazon River is the longest river in the Americas.",
    "question_asia": "Lake Baikal is the world's oldest and deepest freshwater lake.",
    "correct_toast": "Correct!",
    "incorrect_toast": "Incorrect!",
}

QUESTION_BANK: Tuple[Question, ...] = (
    Question("question_oceans", True),
    Question("question_mideast", False),
    Question("question_africa", False),
    Question("question_americas", True),
    Question("question_asia", True),
)


def prompt_text(key: str) -> str:
    return STRINGS[key]


def validate_bank(questions: Sequence[Question]) -> None:
    """Fails fast on a bank the screen could not display."""
    if not questions:
        raise EmptyQuestionBankError("Question bank is empty")
    missing = [q.prompt for q in questions if q.prompt not in STRINGS]
    if missing:
        raise ValueError(f"No display string for prompt keys: {', '.join(missing)}")
