from dataclasses import dataclass
from typing import Sequence, Tuple


class EmptyQuestionBankError(ValueError):
    pass


@dataclass(frozen=True)
class Question:
    prompt: str
    correct_answer: bool


class QuizState:
    """
    Cursor over a fixed, non-empty sequence of questions.

    Navigation wraps in both directions, so every operation is total and
    ``0 <= current_index < len(questions)`` holds after each call.
    """

    def __init__(self, questions: Sequence[Question], current_index: int = 0) -> None:
        if not questions:
            raise EmptyQuestionBankError("QuizState needs at least one question")
        self.questions: Tuple[Question, ...] = tuple(questions)
        self.current_index = current_index % len(self.questions)

    def __len__(self) -> int:
        return len(self.questions)

    def current_question(self) -> Question:
        return self.questions[self.current_index]

    def advance(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.questions)

    def retreat(self) -> None:
        n = len(self.questions)
        self.current_index = (self.current_index - 1 + n) % n

    def check_answer(self, user_guess: bool) -> bool:
        return user_guess == self.current_question().correct_answer

    def serialize_position(self) -> int:
        return self.current_index

    def restore_position(self, value: object) -> int:
        # bool is an int subclass but never a stored position
        if isinstance(value, int) and not isinstance(value, bool):
            self.current_index = value % len(self.questions)
        return self.current_index
