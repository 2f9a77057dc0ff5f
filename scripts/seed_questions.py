from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass

import structlog

from millionaire.core.config import get_settings
from millionaire.core.logging import configure_logging
from millionaire.db.repo.questions_repo import QuestionsRepo
from millionaire.db.session import SessionLocal
from millionaire.game.questions.types import QUESTION_LEVELS
from millionaire.game.randomness import RandomSource, seeded_random, system_random

logger = structlog.get_logger("scripts.seed_questions")

MAX_ANSWER_YEAR = 2001


@dataclass(frozen=True, slots=True)
class SeedQuestion:
    level: int
    text: str
    answers: tuple[str, str, str, str]


def build_seed_questions(count: int, *, rng: RandomSource, offset: int = 0) -> list[SeedQuestion]:
    if count < 0:
        raise ValueError("count must not be negative")

    seeds: list[SeedQuestion] = []
    for n in range(offset, offset + count):
        years = rng.sample(range(MAX_ANSWER_YEAR), 4)
        seeds.append(
            SeedQuestion(
                level=n % len(QUESTION_LEVELS),
                text=f"In which year did space odyssey #{n} take place?",
                answers=(str(years[0]), str(years[1]), str(years[2]), str(years[3])),
            )
        )
    return seeds


async def _run(*, count: int, offset: int, rng: RandomSource) -> int:
    seeds = build_seed_questions(count, rng=rng, offset=offset)
    async with SessionLocal.begin() as session:
        for seed in seeds:
            await QuestionsRepo.create(session, level=seed.level, text=seed.text, answers=seed.answers)
        counts = await QuestionsRepo.count_by_level(session)

    logger.info("seed_questions_done", inserted=len(seeds), per_level=counts)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Insert synthetic questions spread over all game levels.")
    parser.add_argument("--count", type=int, default=len(QUESTION_LEVELS))
    parser.add_argument("--offset", type=int, default=0, help="first sequence number, keeps texts unique")
    parser.add_argument("--seed", default=None)
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.app_env != "dev")
    rng = seeded_random(args.seed) if args.seed is not None else system_random()
    return asyncio.run(_run(count=args.count, offset=args.offset, rng=rng))


if __name__ == "__main__":
    raise SystemExit(main())
