from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.repo.users_repo import UsersRepo
from millionaire.game.engine import rules as engine_rules
from millionaire.game.engine.constants import get_game_rules
from millionaire.game.engine.errors import DuplicateGameError, GameNotFoundError, InsufficientQuestionsError
from millionaire.game.engine.types import (
    AnswerOutcome,
    CashOutOutcome,
    Game,
    GameRules,
    GameStatus,
    HelpKind,
    HelpOutcome,
)
from millionaire.game.questions.types import QUESTION_LEVELS
from millionaire.game.randomness import RandomSource, system_random

logger = structlog.get_logger("millionaire.game.engine.service")


class GameService:
    """Runs engine operations against persisted games.

    Each call expects to run inside the caller's transaction; mutating calls
    take a row lock on the game so concurrent requests are serialized.
    """

    @staticmethod
    async def _load_owned_for_update(session: AsyncSession, *, user_id: int, game_id: int) -> Game:
        game = await GamesRepo.load_for_update(session, game_id)
        if game is None or game.user_id != user_id:
            raise GameNotFoundError(f"game {game_id} not found for user {user_id}")
        return game

    @staticmethod
    async def _credit_if_due(
        session: AsyncSession,
        *,
        game: Game,
        rules: GameRules,
    ) -> tuple[int, int | None]:
        amount = engine_rules.balance_credit(game, rules=rules)
        if amount <= 0:
            return 0, None
        balance = await UsersRepo.credit_balance(session, user_id=game.user_id, amount=amount)
        return amount, balance

    @staticmethod
    def _log_finished(game: Game, *, status: GameStatus, credited_amount: int) -> None:
        logger.info(
            "game_finished",
            game_id=game.game_id,
            user_id=game.user_id,
            status=status.value,
            current_level=game.current_level,
            prize=game.prize,
            credited_amount=credited_amount,
        )

    @staticmethod
    async def create_game_for_user(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
        rng: RandomSource | None = None,
    ) -> Game:
        existing = await GamesRepo.find_unfinished_for_user(session, user_id)
        if existing is not None:
            logger.info("game_create_rejected_duplicate", user_id=user_id, game_id=existing.game_id)
            raise DuplicateGameError(existing)

        rng = rng or system_random()
        ids_by_level = await QuestionsRepo.list_ids_by_level(session)
        missing_levels = [level for level in QUESTION_LEVELS if not ids_by_level.get(level)]
        if missing_levels:
            logger.warning("game_create_insufficient_questions", user_id=user_id, missing_levels=missing_levels)
            raise InsufficientQuestionsError(missing_levels)

        picked_ids = [rng.choice(ids_by_level[level]) for level in QUESTION_LEVELS]
        questions = await QuestionsRepo.get_many(session, picked_ids)
        game = engine_rules.build_game(user_id, questions, rng=rng, now_utc=now_utc)

        try:
            async with session.begin_nested():
                await GamesRepo.save(session, game=game)
        except IntegrityError:
            existing = await GamesRepo.find_unfinished_for_user(session, user_id)
            if existing is None:
                raise
            logger.info("game_create_rejected_duplicate", user_id=user_id, game_id=existing.game_id)
            raise DuplicateGameError(existing) from None

        logger.info("game_created", user_id=user_id, game_id=game.game_id)
        return game

    @staticmethod
    async def get_game_for_user(session: AsyncSession, *, user_id: int, game_id: int) -> Game:
        game = await GamesRepo.load(session, game_id)
        if game is None or game.user_id != user_id:
            raise GameNotFoundError(f"game {game_id} not found for user {user_id}")
        return game

    @staticmethod
    async def list_games_for_user(session: AsyncSession, *, user_id: int) -> list[Game]:
        return await GamesRepo.list_for_user(session, user_id)

    @staticmethod
    async def answer_current_question(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        letter: object,
        now_utc: datetime,
        rules: GameRules | None = None,
    ) -> AnswerOutcome:
        rules = rules or get_game_rules()
        game = await GameService._load_owned_for_update(session, user_id=user_id, game_id=game_id)
        level_before = game.current_level

        engine_rules.answer_current_question(game, letter, now_utc=now_utc, rules=rules)
        status = engine_rules.game_status(game, rules=rules)
        is_correct = game.current_level > level_before

        await GamesRepo.save(session, game=game)
        logger.info(
            "game_answer_submitted",
            game_id=game.game_id,
            user_id=user_id,
            level=level_before,
            is_correct=is_correct,
            status=status.value,
        )

        credited_amount = 0
        if game.finished:
            credited_amount, _ = await GameService._credit_if_due(session, game=game, rules=rules)
            GameService._log_finished(game, status=status, credited_amount=credited_amount)

        return AnswerOutcome(
            game=game,
            is_correct=is_correct,
            status=status,
            credited_amount=credited_amount,
        )

    @staticmethod
    async def take_money(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        now_utc: datetime,
        rules: GameRules | None = None,
    ) -> CashOutOutcome:
        rules = rules or get_game_rules()
        game = await GameService._load_owned_for_update(session, user_id=user_id, game_id=game_id)

        engine_rules.take_money(game, now_utc=now_utc, rules=rules)
        status = engine_rules.game_status(game, rules=rules)
        await GamesRepo.save(session, game=game)

        credited_amount, balance = await GameService._credit_if_due(session, game=game, rules=rules)
        GameService._log_finished(game, status=status, credited_amount=credited_amount)
        return CashOutOutcome(
            game=game,
            status=status,
            credited_amount=credited_amount,
            balance=balance,
        )

    @staticmethod
    async def use_help(
        session: AsyncSession,
        *,
        user_id: int,
        game_id: int,
        kind: HelpKind,
        now_utc: datetime,
        rules: GameRules | None = None,
        rng: RandomSource | None = None,
    ) -> HelpOutcome:
        rules = rules or get_game_rules()
        game = await GameService._load_owned_for_update(session, user_id=user_id, game_id=game_id)

        engine_rules.use_help(game, kind, now_utc=now_utc, rules=rules, rng=rng or system_random())
        status = engine_rules.game_status(game, rules=rules)
        await GamesRepo.save(session, game=game)

        if game.finished:
            GameService._log_finished(game, status=status, credited_amount=0)
            return HelpOutcome(game=game, kind=kind, status=status)

        payload = game.current_game_question.help_hash[kind.value]
        logger.info(
            "game_help_used",
            game_id=game.game_id,
            user_id=user_id,
            help_kind=kind.value,
            level=game.current_level,
        )
        return HelpOutcome(game=game, kind=kind, status=status, payload=payload)
