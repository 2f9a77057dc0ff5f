from __future__ import annotations

from datetime import datetime, timezone

from millionaire.game.engine.rules import build_game
from millionaire.game.engine.types import ANSWER_KEYS, Game, GameQuestion
from millionaire.game.questions.types import QUESTION_LEVELS, Question
from millionaire.game.randomness import seeded_random

UTC = timezone.utc
NOW_UTC = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def make_question(level: int = 0, *, question_id: int | None = None, text: str | None = None) -> Question:
    number = question_id if question_id is not None else level + 1
    return Question(
        question_id=number,
        level=level,
        text=text or f"In which year did space odyssey #{number} take place?",
        answers=(f"right {number}", f"wrong {number}-2", f"wrong {number}-3", f"wrong {number}-4"),
    )


def make_game_question(level: int = 0, *, slots: dict[str, int] | None = None) -> GameQuestion:
    # correct answer (slot 1) sits under letter "b"
    return GameQuestion(
        question=make_question(level),
        slots=slots or {"a": 2, "b": 1, "c": 4, "d": 3},
    )


def make_game(
    *,
    user_id: int = 1,
    game_id: int | None = 1,
    created_at: datetime = NOW_UTC,
    seed: int = 7,
) -> Game:
    questions = [make_question(level) for level in QUESTION_LEVELS]
    game = build_game(user_id, questions, rng=seeded_random(seed), now_utc=created_at)
    game.game_id = game_id
    return game


def wrong_key(game_question: GameQuestion) -> str:
    return next(key for key in ANSWER_KEYS if key != game_question.correct_answer_key)
