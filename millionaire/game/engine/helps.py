from __future__ import annotations

from collections.abc import Callable, Sequence

from millionaire.game.engine.constants import (
    AUDIENCE_CORRECT_BONUS_PROBABILITY,
    AUDIENCE_TOTAL_VOTES,
    FRIEND_CALL_CORRECT_PROBABILITY,
    FRIEND_NAMES,
)
from millionaire.game.engine.errors import HelpAlreadyUsedError
from millionaire.game.engine.types import ANSWER_KEYS, GameQuestion, HelpKind
from millionaire.game.randomness import RandomSource

FiftyFiftyPayload = list[str]
AudiencePayload = dict[str, int]
FriendCallPayload = str
HelpPayload = FiftyFiftyPayload | AudiencePayload | FriendCallPayload


def fifty_fifty_keys(keys: Sequence[str], correct_key: str, *, rng: RandomSource) -> FiftyFiftyPayload:
    wrong_keys = [key for key in keys if key != correct_key]
    return sorted([correct_key, rng.choice(wrong_keys)])


def audience_distribution(keys: Sequence[str], correct_key: str, *, rng: RandomSource) -> AudiencePayload:
    """Split ``AUDIENCE_TOTAL_VOTES`` between the still available ``keys``.

    Letters outside ``keys`` (removed by fifty-fifty) keep a zero count so the
    result always has all four letters.
    """
    weights = {key: rng.randint(1, 40) for key in keys}
    if correct_key in weights and rng.random() < AUDIENCE_CORRECT_BONUS_PROBABILITY:
        weights[correct_key] += rng.randint(30, 70)

    total_weight = sum(weights.values())
    votes = {key: weight * AUDIENCE_TOTAL_VOTES // total_weight for key, weight in weights.items()}
    leftover = AUDIENCE_TOTAL_VOTES - sum(votes.values())
    by_remainder = sorted(
        weights,
        key=lambda key: (-(weights[key] * AUDIENCE_TOTAL_VOTES % total_weight), key),
    )
    for key in by_remainder[:leftover]:
        votes[key] += 1

    return {key: votes.get(key, 0) for key in ANSWER_KEYS}


def friend_call_message(keys: Sequence[str], correct_key: str, *, rng: RandomSource) -> FriendCallPayload:
    wrong_keys = [key for key in keys if key != correct_key]
    if not wrong_keys or rng.random() < FRIEND_CALL_CORRECT_PROBABILITY:
        guess = correct_key
    else:
        guess = rng.choice(wrong_keys)
    return f"{rng.choice(FRIEND_NAMES)} thinks the answer is {guess.upper()}"


_GENERATORS: dict[HelpKind, Callable[..., HelpPayload]] = {
    HelpKind.FIFTY_FIFTY: fifty_fifty_keys,
    HelpKind.AUDIENCE_HELP: audience_distribution,
    HelpKind.FRIEND_CALL: friend_call_message,
}


def add_help(game_question: GameQuestion, kind: HelpKind, *, rng: RandomSource) -> HelpPayload:
    if kind.value in game_question.help_hash:
        raise HelpAlreadyUsedError(kind)

    payload = _GENERATORS[kind](
        game_question.keys_to_use_in_help(),
        game_question.correct_answer_key,
        rng=rng,
    )
    game_question.help_hash[kind.value] = payload
    return payload
