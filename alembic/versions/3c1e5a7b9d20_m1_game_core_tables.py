"""m1_game_core_tables

Revision ID: 3c1e5a7b9d20
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "3c1e5a7b9d20"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("answer1", sa.Text(), nullable=False),
        sa.Column("answer2", sa.Text(), nullable=False),
        sa.Column("answer3", sa.Text(), nullable=False),
        sa.Column("answer4", sa.Text(), nullable=False),
        sa.CheckConstraint("level >= 0 AND level <= 14", name="ck_questions_level_range"),
        sa.UniqueConstraint("text", name="uq_questions_text"),
    )
    op.create_index("idx_questions_level", "questions", ["level"])

    op.create_table(
        "games",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("current_level", sa.SmallInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("prize", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_failed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("fifty_fifty_used", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("audience_help_used", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("friend_call_used", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint(
            "current_level >= 0 AND current_level <= 15",
            name="ck_games_current_level_range",
        ),
        sa.CheckConstraint("prize >= 0", name="ck_games_prize_non_negative"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("idx_games_user_created", "games", ["user_id", "created_at"])
    op.create_index(
        "uq_games_user_in_progress",
        "games",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("finished_at IS NULL"),
    )

    op.create_table(
        "game_questions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("game_id", sa.BigInteger(), nullable=False),
        sa.Column("question_id", sa.BigInteger(), nullable=False),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("a", sa.SmallInteger(), nullable=False),
        sa.Column("b", sa.SmallInteger(), nullable=False),
        sa.Column("c", sa.SmallInteger(), nullable=False),
        sa.Column("d", sa.SmallInteger(), nullable=False),
        sa.Column(
            "help_hash",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.CheckConstraint(
            "a + b + c + d = 10 AND a * b * c * d = 24",
            name="ck_game_questions_slots_permutation",
        ),
        sa.ForeignKeyConstraint(["game_id"], ["games.id"]),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"]),
    )
    op.create_index("uq_game_questions_game_level", "game_questions", ["game_id", "level"], unique=True)


def downgrade() -> None:
    op.drop_index("uq_game_questions_game_level", table_name="game_questions")
    op.drop_table("game_questions")
    op.drop_index("uq_games_user_in_progress", table_name="games")
    op.drop_index("idx_games_user_created", table_name="games")
    op.drop_table("games")
    op.drop_index("idx_questions_level", table_name="questions")
    op.drop_table("questions")
    op.drop_table("users")
