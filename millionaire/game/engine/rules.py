from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from millionaire.game.engine.errors import GameAlreadyFinishedError, HelpAlreadyUsedError, InsufficientQuestionsError
from millionaire.game.engine.helps import add_help
from millionaire.game.engine.types import ANSWER_KEYS, Game, GameQuestion, GameRules, GameStatus, HelpKind
from millionaire.game.questions.types import ANSWER_SLOTS, MAX_LEVEL, QUESTION_LEVELS, Question
from millionaire.game.randomness import RandomSource

BALANCE_CREDITED_STATUSES = frozenset({GameStatus.WON, GameStatus.MONEY})


def derive_game_status(
    *,
    finished_at: datetime | None,
    created_at: datetime,
    is_failed: bool,
    current_level: int,
    time_limit: timedelta,
) -> GameStatus:
    if finished_at is None:
        return GameStatus.IN_PROGRESS
    if finished_at - created_at > time_limit:
        return GameStatus.TIMEOUT
    if is_failed:
        return GameStatus.FAIL
    if current_level > MAX_LEVEL:
        return GameStatus.WON
    return GameStatus.MONEY


def game_status(game: Game, *, rules: GameRules) -> GameStatus:
    return derive_game_status(
        finished_at=game.finished_at,
        created_at=game.created_at,
        is_failed=game.is_failed,
        current_level=game.current_level,
        time_limit=rules.time_limit,
    )


def is_time_over(game: Game, *, now_utc: datetime, rules: GameRules) -> bool:
    return now_utc - game.created_at > rules.time_limit


def fireproof_prize(answered_level: int, *, rules: GameRules) -> int:
    reached = [level for level in rules.fireproof_levels if level <= answered_level]
    if not reached:
        return 0
    return rules.prizes[reached[-1]]


def cash_out_prize(answered_level: int, *, rules: GameRules) -> int:
    if answered_level < 0:
        return 0
    return rules.prizes[answered_level]


def balance_credit(game: Game, *, rules: GameRules) -> int:
    if game_status(game, rules=rules) in BALANCE_CREDITED_STATUSES:
        return game.prize
    return 0


def build_game(
    user_id: int,
    candidates: Iterable[Question],
    *,
    rng: RandomSource,
    now_utc: datetime,
) -> Game:
    """Assemble a fresh game with one question per level.

    Several candidates may share a level; one of them is drawn at random.
    """
    by_level: dict[int, list[Question]] = {}
    for question in candidates:
        by_level.setdefault(question.level, []).append(question)

    missing_levels = [level for level in QUESTION_LEVELS if not by_level.get(level)]
    if missing_levels:
        raise InsufficientQuestionsError(missing_levels)

    game_questions: list[GameQuestion] = []
    for level in QUESTION_LEVELS:
        slots = list(ANSWER_SLOTS)
        rng.shuffle(slots)
        game_questions.append(
            GameQuestion(
                question=rng.choice(by_level[level]),
                slots=dict(zip(ANSWER_KEYS, slots)),
            )
        )

    return Game(user_id=user_id, game_questions=game_questions, created_at=now_utc)


def _ensure_in_progress(game: Game) -> None:
    if game.finished:
        raise GameAlreadyFinishedError(f"game {game.game_id} is already finished")


def _finish(game: Game, *, prize: int, failed: bool, now_utc: datetime) -> None:
    game.finished_at = now_utc
    game.prize = prize
    game.is_failed = failed


def _time_out(game: Game, *, now_utc: datetime, rules: GameRules) -> None:
    _finish(
        game,
        prize=fireproof_prize(game.previous_level, rules=rules),
        failed=True,
        now_utc=now_utc,
    )


def answer_current_question(
    game: Game,
    letter: object,
    *,
    now_utc: datetime,
    rules: GameRules,
) -> Game:
    _ensure_in_progress(game)

    if is_time_over(game, now_utc=now_utc, rules=rules):
        _time_out(game, now_utc=now_utc, rules=rules)
        return game

    game_question = game.current_game_question
    if game_question is not None and game_question.answer_correct(letter):
        game.current_level += 1
        if game.current_level > MAX_LEVEL:
            _finish(game, prize=rules.max_prize, failed=False, now_utc=now_utc)
        return game

    _finish(
        game,
        prize=fireproof_prize(game.previous_level, rules=rules),
        failed=True,
        now_utc=now_utc,
    )
    return game


def take_money(game: Game, *, now_utc: datetime, rules: GameRules) -> Game:
    _ensure_in_progress(game)

    if is_time_over(game, now_utc=now_utc, rules=rules):
        _time_out(game, now_utc=now_utc, rules=rules)
        return game

    _finish(
        game,
        prize=cash_out_prize(game.previous_level, rules=rules),
        failed=False,
        now_utc=now_utc,
    )
    return game


def use_help(
    game: Game,
    kind: HelpKind,
    *,
    now_utc: datetime,
    rules: GameRules,
    rng: RandomSource,
) -> Game:
    _ensure_in_progress(game)

    if is_time_over(game, now_utc=now_utc, rules=rules):
        _time_out(game, now_utc=now_utc, rules=rules)
        return game

    if game.help_used(kind):
        raise HelpAlreadyUsedError(kind)

    game_question = game.current_game_question
    if game_question is None:
        raise GameAlreadyFinishedError(f"game {game.game_id} has no question left to help with")

    add_help(game_question, kind, rng=rng)
    setattr(game, kind.flag_name, True)
    return game
