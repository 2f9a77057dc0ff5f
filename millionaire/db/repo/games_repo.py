from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from millionaire.db.models.game_questions import GameQuestion as GameQuestionRow
from millionaire.db.models.games import Game as GameRow
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.game.engine.errors import GameNotFoundError
from millionaire.game.engine.types import ANSWER_KEYS, Game, GameQuestion


def _game_question_to_domain(row: GameQuestionRow) -> GameQuestion:
    return GameQuestion(
        question=QuestionsRepo.to_domain(row.question),
        slots={key: int(getattr(row, key)) for key in ANSWER_KEYS},
        help_hash=dict(row.help_hash or {}),
        game_question_id=row.id,
    )


def _game_to_domain(row: GameRow) -> Game:
    return Game(
        user_id=row.user_id,
        game_questions=[_game_question_to_domain(gq_row) for gq_row in row.game_questions],
        created_at=row.created_at,
        current_level=row.current_level,
        prize=row.prize,
        finished_at=row.finished_at,
        is_failed=row.is_failed,
        fifty_fifty_used=row.fifty_fifty_used,
        audience_help_used=row.audience_help_used,
        friend_call_used=row.friend_call_used,
        game_id=row.id,
    )


def _apply_game_to_row(row: GameRow, game: Game) -> None:
    row.current_level = game.current_level
    row.prize = game.prize
    row.finished_at = game.finished_at
    row.is_failed = game.is_failed
    row.fifty_fifty_used = game.fifty_fifty_used
    row.audience_help_used = game.audience_help_used
    row.friend_call_used = game.friend_call_used

    questions_by_level = {game_question.level: game_question for game_question in game.game_questions}
    for gq_row in row.game_questions:
        game_question = questions_by_level.get(gq_row.level)
        if game_question is None or gq_row.help_hash == game_question.help_hash:
            continue
        gq_row.help_hash = dict(game_question.help_hash)
        flag_modified(gq_row, "help_hash")


class GamesRepo:
    @staticmethod
    async def load(session: AsyncSession, game_id: int) -> Game | None:
        row = await session.get(GameRow, game_id)
        if row is None:
            return None
        return _game_to_domain(row)

    @staticmethod
    async def load_for_update(session: AsyncSession, game_id: int) -> Game | None:
        stmt = select(GameRow).where(GameRow.id == game_id).with_for_update()
        result = await session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return _game_to_domain(row)

    @staticmethod
    async def find_unfinished_for_user(session: AsyncSession, user_id: int) -> Game | None:
        stmt = select(GameRow).where(
            GameRow.user_id == user_id,
            GameRow.finished_at.is_(None),
        )
        result = await session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return _game_to_domain(row)

    @staticmethod
    async def list_for_user(session: AsyncSession, user_id: int) -> list[Game]:
        stmt = (
            select(GameRow)
            .where(GameRow.user_id == user_id)
            .order_by(GameRow.created_at.desc(), GameRow.id.desc())
        )
        result = await session.execute(stmt)
        return [_game_to_domain(row) for row in result.scalars().all()]

    @staticmethod
    async def save(session: AsyncSession, *, game: Game) -> Game:
        if game.game_id is None:
            row = GameRow(
                user_id=game.user_id,
                created_at=game.created_at,
                game_questions=[
                    GameQuestionRow(
                        question_id=game_question.question.question_id,
                        level=game_question.level,
                        help_hash=dict(game_question.help_hash),
                        **game_question.slots,
                    )
                    for game_question in game.game_questions
                ],
            )
            _apply_game_to_row(row, game)
            session.add(row)
            await session.flush()
            game.game_id = row.id
            for game_question, gq_row in zip(game.game_questions, row.game_questions):
                game_question.game_question_id = gq_row.id
            return game

        row = await session.get(GameRow, game.game_id)
        if row is None:
            raise GameNotFoundError(f"game {game.game_id} does not exist")
        _apply_game_to_row(row, game)
        await session.flush()
        return game
