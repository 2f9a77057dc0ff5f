from __future__ import annotations

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from millionaire.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def create(session: AsyncSession, *, name: str) -> User:
        user = User(name=name)
        session.add(user)
        await session.flush()
        await session.refresh(user)
        return user

    @staticmethod
    async def credit_balance(session: AsyncSession, *, user_id: int, amount: int) -> int:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
            .returning(User.balance)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())
