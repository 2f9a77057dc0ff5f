from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from millionaire.db.models.games import Game as GameRow
from millionaire.db.repo.games_repo import GamesRepo
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.repo.users_repo import UsersRepo
from millionaire.db.session import SessionLocal
from millionaire.game.engine.constants import DEFAULT_GAME_RULES
from millionaire.game.engine.errors import DuplicateGameError, GameNotFoundError
from millionaire.game.engine.service import GameService
from millionaire.game.engine.types import ANSWER_KEYS, GameStatus, HelpKind
from millionaire.game.questions.types import QUESTION_LEVELS
from millionaire.game.randomness import seeded_random

UTC = timezone.utc
NOW_UTC = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


async def _seed_user_and_questions(per_level: int = 2) -> int:
    async with SessionLocal.begin() as session:
        user = await UsersRepo.create(session, name="Vadim")
        for n in range(per_level * len(QUESTION_LEVELS)):
            await QuestionsRepo.create(
                session,
                level=n % len(QUESTION_LEVELS),
                text=f"In which year did space odyssey #{n} take place?",
                answers=(f"{2001 + n}", f"{1000 + n}", f"{1500 + n}", f"{1900 + n}"),
            )
        return user.id


@pytest.mark.asyncio
async def test_create_game_persists_fifteen_questions() -> None:
    user_id = await _seed_user_and_questions()

    async with SessionLocal.begin() as session:
        created = await GameService.create_game_for_user(
            session,
            user_id=user_id,
            now_utc=NOW_UTC,
            rng=seeded_random(1),
        )

    async with SessionLocal() as session:
        loaded = await GamesRepo.load(session, created.game_id)
        counts = await QuestionsRepo.count_by_level(session)

    assert loaded is not None
    assert loaded.user_id == user_id
    assert [gq.level for gq in loaded.game_questions] == list(range(15))
    assert [gq.slots for gq in loaded.game_questions] == [gq.slots for gq in created.game_questions]
    assert all(gq.help_hash == {} for gq in loaded.game_questions)
    assert counts == {level: 2 for level in QUESTION_LEVELS}


@pytest.mark.asyncio
async def test_second_unfinished_game_is_rejected() -> None:
    user_id = await _seed_user_and_questions()

    async with SessionLocal.begin() as session:
        first = await GameService.create_game_for_user(session, user_id=user_id, now_utc=NOW_UTC)

    with pytest.raises(DuplicateGameError) as exc_info:
        async with SessionLocal.begin() as session:
            await GameService.create_game_for_user(session, user_id=user_id, now_utc=NOW_UTC)

    assert exc_info.value.game.game_id == first.game_id
    async with SessionLocal() as session:
        total = len((await session.execute(select(GameRow.id))).scalars().all())
    assert total == 1


@pytest.mark.asyncio
async def test_help_answer_and_cash_out_are_persisted() -> None:
    user_id = await _seed_user_and_questions()

    async with SessionLocal.begin() as session:
        game = await GameService.create_game_for_user(session, user_id=user_id, now_utc=NOW_UTC)
    game_id = game.game_id

    async with SessionLocal.begin() as session:
        help_outcome = await GameService.use_help(
            session,
            user_id=user_id,
            game_id=game_id,
            kind=HelpKind.AUDIENCE_HELP,
            now_utc=NOW_UTC,
            rules=DEFAULT_GAME_RULES,
            rng=seeded_random(2),
        )
    assert sorted(help_outcome.payload) == list(ANSWER_KEYS)

    for minute in (1, 2):
        async with SessionLocal.begin() as session:
            current = await GameService.get_game_for_user(session, user_id=user_id, game_id=game_id)
            outcome = await GameService.answer_current_question(
                session,
                user_id=user_id,
                game_id=game_id,
                letter=current.current_game_question.correct_answer_key,
                now_utc=NOW_UTC + timedelta(minutes=minute),
                rules=DEFAULT_GAME_RULES,
            )
        assert outcome.is_correct is True

    async with SessionLocal.begin() as session:
        cash_out = await GameService.take_money(
            session,
            user_id=user_id,
            game_id=game_id,
            now_utc=NOW_UTC + timedelta(minutes=3),
            rules=DEFAULT_GAME_RULES,
        )

    assert cash_out.status is GameStatus.MONEY
    assert cash_out.credited_amount == 200
    assert cash_out.balance == 200

    async with SessionLocal() as session:
        stored = await GamesRepo.load(session, game_id)
        user = await UsersRepo.get_by_id(session, user_id)
        history = await GameService.list_games_for_user(session, user_id=user_id)

    assert stored is not None
    assert stored.finished is True
    assert stored.prize == 200
    assert stored.audience_help_used is True
    assert sorted(stored.game_questions[0].help_hash["audience_help"]) == list(ANSWER_KEYS)
    assert user is not None and user.balance == 200
    assert [entry.game_id for entry in history] == [game_id]


@pytest.mark.asyncio
async def test_foreign_game_is_not_found() -> None:
    user_id = await _seed_user_and_questions()
    async with SessionLocal.begin() as session:
        stranger = await UsersRepo.create(session, name="Stranger")
        game = await GameService.create_game_for_user(session, user_id=user_id, now_utc=NOW_UTC)

    with pytest.raises(GameNotFoundError):
        async with SessionLocal() as session:
            await GameService.get_game_for_user(session, user_id=stranger.id, game_id=game.game_id)
