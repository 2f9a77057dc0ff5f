from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Subset of ``random.Random`` the game relies on.

    Every randomized decision (question draw, answer permutation, help payloads)
    goes through one of these so callers can pin the outcome with a seed.
    """

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...

    def shuffle(self, x: MutableSequence[object]) -> None: ...


_SYSTEM_RANDOM = random.SystemRandom()


def system_random() -> RandomSource:
    return _SYSTEM_RANDOM


def seeded_random(seed: int | str) -> RandomSource:
    return random.Random(seed)
