import pytest

from geoquiz.domain.model import EmptyQuestionBankError, Question
from geoquiz.domain.question_bank import QUESTION_BANK, prompt_text, validate_bank


def test_bank_layout():
    assert [q.correct_answer for q in QUESTION_BANK] == [True, False, False, True, True]
    assert QUESTION_BANK[1].prompt == "question_mideast"


def test_every_prompt_has_text():
    validate_bank(QUESTION_BANK)
    for q in QUESTION_BANK:
        assert prompt_text(q.prompt)


def test_validate_rejects_empty():
    with pytest.raises(EmptyQuestionBankError):
        validate_bank(())


def test_validate_rejects_unknown_key():
    with pytest.raises(ValueError, match="question_europe"):
        validate_bank((Question("question_europe", True),))


def test_unknown_prompt_key():
    with pytest.raises(KeyError):
        prompt_text("question_europe")
