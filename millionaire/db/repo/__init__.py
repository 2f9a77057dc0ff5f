from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.repo.users_repo import UsersRepo

__all__ = [
    "GamesRepo",
    "QuestionsRepo",
    "UsersRepo",
]
