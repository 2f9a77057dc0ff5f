from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from millionaire.core.config import (
    DEFAULT_GAME_FIREPROOF_LEVELS,
    DEFAULT_GAME_PRIZES,
    DEFAULT_GAME_TIME_LIMIT_MINUTES,
    get_settings,
)
from millionaire.game.engine.types import GameRules

DEFAULT_PRIZES = DEFAULT_GAME_PRIZES
DEFAULT_FIREPROOF_LEVELS = DEFAULT_GAME_FIREPROOF_LEVELS
DEFAULT_TIME_LIMIT = timedelta(minutes=DEFAULT_GAME_TIME_LIMIT_MINUTES)

DEFAULT_GAME_RULES = GameRules(
    prizes=DEFAULT_PRIZES,
    fireproof_levels=DEFAULT_FIREPROOF_LEVELS,
    time_limit=DEFAULT_TIME_LIMIT,
)

FRIEND_CALL_CORRECT_PROBABILITY = 0.8
AUDIENCE_TOTAL_VOTES = 100
AUDIENCE_CORRECT_BONUS_PROBABILITY = 0.75
FRIEND_NAMES: tuple[str, ...] = (
    "Uncle Bob",
    "Aunt Martha",
    "Your old classmate Steve",
    "Grandpa Joe",
    "Professor Lee",
    "Neighbour Kate",
)


@lru_cache(maxsize=1)
def get_game_rules() -> GameRules:
    settings = get_settings()
    return GameRules(
        prizes=tuple(settings.game_prizes),
        fireproof_levels=tuple(settings.game_fireproof_levels),
        time_limit=timedelta(minutes=settings.game_time_limit_minutes),
    )
