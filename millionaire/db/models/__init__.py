from millionaire.db.models.game_questions import GameQuestion
from millionaire.db.models.games import Game
from millionaire.db.models.questions import Question
from millionaire.db.models.users import User

__all__ = [
    "Game",
    "GameQuestion",
    "Question",
    "User",
]
