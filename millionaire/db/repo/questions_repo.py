from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.questions import Question as QuestionRow
from millionaire.game.questions.types import Question


class QuestionsRepo:
    @staticmethod
    def to_domain(row: QuestionRow) -> Question:
        return Question(
            question_id=row.id,
            level=row.level,
            text=row.text,
            answers=(row.answer1, row.answer2, row.answer3, row.answer4),
        )

    @staticmethod
    async def list_ids_by_level(session: AsyncSession) -> dict[int, list[int]]:
        stmt = select(QuestionRow.level, QuestionRow.id).order_by(QuestionRow.level.asc(), QuestionRow.id.asc())
        result = await session.execute(stmt)
        ids_by_level: dict[int, list[int]] = {}
        for level, question_id in result.all():
            ids_by_level.setdefault(int(level), []).append(int(question_id))
        return ids_by_level

    @staticmethod
    async def count_by_level(session: AsyncSession) -> dict[int, int]:
        stmt = select(QuestionRow.level, func.count()).group_by(QuestionRow.level)
        result = await session.execute(stmt)
        return {int(level): int(total) for level, total in result.all()}

    @staticmethod
    async def get_many(session: AsyncSession, question_ids: Sequence[int]) -> list[Question]:
        ids = tuple({int(question_id) for question_id in question_ids})
        if not ids:
            return []
        stmt = select(QuestionRow).where(QuestionRow.id.in_(ids)).order_by(QuestionRow.level.asc())
        result = await session.execute(stmt)
        return [QuestionsRepo.to_domain(row) for row in result.scalars().all()]

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        level: int,
        text: str,
        answers: Sequence[str],
    ) -> Question:
        answer1, answer2, answer3, answer4 = answers
        row = QuestionRow(
            level=level,
            text=text,
            answer1=answer1,
            answer2=answer2,
            answer3=answer3,
            answer4=answer4,
        )
        session.add(row)
        await session.flush()
        return QuestionsRepo.to_domain(row)
