from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, SmallInteger, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from millionaire.db.models.base import Base
from millionaire.db.models.game_questions import GameQuestion


class Game(Base):
    __tablename__ = "games"
    __table_args__ = (
        CheckConstraint("current_level >= 0 AND current_level <= 15", name="current_level_range"),
        CheckConstraint("prize >= 0", name="prize_non_negative"),
        Index("idx_games_user_created", "user_id", "created_at"),
        Index(
            "uq_games_user_in_progress",
            "user_id",
            unique=True,
            postgresql_where=text("finished_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    current_level: Mapped[int] = mapped_column(SmallInteger, nullable=False, server_default=text("0"))
    prize: Mapped[int] = mapped_column(BigInteger, nullable=False, server_default=text("0"))
    is_failed: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    fifty_fifty_used: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    audience_help_used: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    friend_call_used: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    game_questions: Mapped[list[GameQuestion]] = relationship(
        order_by=GameQuestion.level,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}
