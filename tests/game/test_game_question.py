from __future__ import annotations

import pytest

from millionaire.game.engine.types import ANSWER_KEYS, GameQuestion, HelpKind
from tests.game.game_fixtures import make_game_question, make_question


def test_variants_follow_letter_slots() -> None:
    game_question = make_game_question()
    answers = game_question.question.answers

    assert game_question.variants == {
        "a": answers[1],
        "b": answers[0],
        "c": answers[3],
        "d": answers[2],
    }


def test_text_and_level_come_from_question() -> None:
    game_question = make_game_question(level=6)

    assert game_question.text == game_question.question.text
    assert game_question.level == 6


def test_correct_answer_key_points_at_first_slot() -> None:
    game_question = make_game_question()

    assert game_question.correct_answer_key == "b"
    assert game_question.correct_answer == game_question.question.answers[0]


@pytest.mark.parametrize(
    ("letter", "expected"),
    [
        ("b", True),
        ("B", True),
        (" b ", False),
        ("b\n", False),
        ("a", False),
        ("d", False),
        ("e", False),
        ("", False),
        (None, False),
        (2, False),
    ],
)
def test_answer_correct(letter: object, expected: bool) -> None:
    assert make_game_question().answer_correct(letter) is expected


def test_help_hash_starts_empty() -> None:
    game_question = make_game_question()

    assert game_question.help_hash == {}
    for kind in HelpKind:
        assert kind.value not in game_question.help_hash


def test_keys_to_use_in_help_respects_fifty_fifty() -> None:
    game_question = make_game_question()
    assert game_question.keys_to_use_in_help() == ANSWER_KEYS

    game_question.help_hash[HelpKind.FIFTY_FIFTY.value] = ["a", "b"]
    assert game_question.keys_to_use_in_help() == ("a", "b")


@pytest.mark.parametrize(
    "slots",
    [
        {"a": 1, "b": 1, "c": 3, "d": 4},
        {"a": 1, "b": 2, "c": 3},
        {"a": 1, "b": 2, "c": 3, "e": 4},
        {"a": 0, "b": 2, "c": 3, "d": 4},
    ],
)
def test_game_question_rejects_invalid_slots(slots: dict[str, int]) -> None:
    with pytest.raises(ValueError, match="answer slots"):
        GameQuestion(question=make_question(), slots=slots)
