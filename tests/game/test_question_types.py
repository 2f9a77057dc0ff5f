from __future__ import annotations

import pytest

from millionaire.game.questions.types import CORRECT_ANSWER_SLOT, MAX_LEVEL, QUESTION_LEVELS, Question


def test_question_levels_cover_fifteen_steps() -> None:
    assert list(QUESTION_LEVELS) == list(range(15))
    assert MAX_LEVEL == 14


def test_answer_for_slot_is_one_based() -> None:
    question = Question(question_id=1, level=3, text="Q?", answers=("w", "x", "y", "z"))

    assert question.answer_for_slot(CORRECT_ANSWER_SLOT) == "w"
    assert question.answer_for_slot(4) == "z"


@pytest.mark.parametrize("level", [-1, 15, 100])
def test_question_rejects_level_outside_range(level: int) -> None:
    with pytest.raises(ValueError, match="level"):
        Question(question_id=1, level=level, text="Q?", answers=("a", "b", "c", "d"))


def test_question_rejects_wrong_answer_count() -> None:
    with pytest.raises(ValueError, match="4 answers"):
        Question(question_id=1, level=0, text="Q?", answers=("a", "b", "c"))  # type: ignore[arg-type]


def test_question_rejects_blank_text() -> None:
    with pytest.raises(ValueError, match="text"):
        Question(question_id=1, level=0, text="   ", answers=("a", "b", "c", "d"))
