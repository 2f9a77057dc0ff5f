from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, SmallInteger, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from millionaire.db.models.base import Base
from millionaire.db.models.questions import Question


class GameQuestion(Base):
    __tablename__ = "game_questions"
    __table_args__ = (
        CheckConstraint("a + b + c + d = 10 AND a * b * c * d = 24", name="slots_permutation"),
        Index("uq_game_questions_game_level", "game_id", "level", unique=True),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    game_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("games.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("questions.id"), nullable=False)
    level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    a: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    b: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    c: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    d: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    help_hash: Mapped[dict[str, object]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )

    question: Mapped[Question] = relationship(lazy="selectin")
