from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, Index, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from millionaire.db.models.base import Base


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("level >= 0 AND level <= 14", name="level_range"),
        Index("idx_questions_level", "level"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    text: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    answer1: Mapped[str] = mapped_column(Text, nullable=False)
    answer2: Mapped[str] = mapped_column(Text, nullable=False)
    answer3: Mapped[str] = mapped_column(Text, nullable=False)
    answer4: Mapped[str] = mapped_column(Text, nullable=False)
