from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from millionaire.game.engine.types import Game, HelpKind


class GameError(Exception):
    pass


class DuplicateGameError(GameError):
    def __init__(self, game: Game) -> None:
        super().__init__(f"user {game.user_id} already has an unfinished game")
        self.game = game


class InsufficientQuestionsError(GameError):
    def __init__(self, missing_levels: Sequence[int]) -> None:
        levels = ", ".join(str(level) for level in missing_levels)
        super().__init__(f"no questions available for levels: {levels}")
        self.missing_levels = tuple(missing_levels)


class GameAlreadyFinishedError(GameError):
    pass


class HelpAlreadyUsedError(GameError):
    def __init__(self, kind: HelpKind) -> None:
        super().__init__(f"{kind.value} has already been used in this game")
        self.kind = kind


class GameNotFoundError(GameError):
    pass
