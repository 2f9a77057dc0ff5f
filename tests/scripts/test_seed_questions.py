from __future__ import annotations

import pytest

from millionaire.game.questions.types import QUESTION_LEVELS, Question
from millionaire.game.randomness import seeded_random
from scripts.seed_questions import build_seed_questions


def test_build_seed_questions_spreads_levels() -> None:
    seeds = build_seed_questions(60, rng=seeded_random(1))

    assert len(seeds) == 60
    for level in QUESTION_LEVELS:
        assert sum(1 for seed in seeds if seed.level == level) == 4


def test_build_seed_questions_have_unique_texts_and_distinct_answers() -> None:
    seeds = build_seed_questions(30, rng=seeded_random(2), offset=100)

    assert len({seed.text for seed in seeds}) == 30
    assert "#100" in seeds[0].text
    for seed in seeds:
        assert len(set(seed.answers)) == 4
        Question(question_id=None, level=seed.level, text=seed.text, answers=seed.answers)


def test_build_seed_questions_rejects_negative_count() -> None:
    with pytest.raises(ValueError, match="negative"):
        build_seed_questions(-1, rng=seeded_random(3))
