from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from millionaire.game.questions.types import ANSWER_SLOTS, CORRECT_ANSWER_SLOT, QUESTION_LEVELS, Question

ANSWER_KEYS: tuple[str, ...] = ("a", "b", "c", "d")


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    FAIL = "fail"
    TIMEOUT = "timeout"
    MONEY = "money"


class HelpKind(str, Enum):
    FIFTY_FIFTY = "fifty_fifty"
    AUDIENCE_HELP = "audience_help"
    FRIEND_CALL = "friend_call"

    @property
    def flag_name(self) -> str:
        return f"{self.value}_used"


@dataclass(frozen=True, slots=True)
class GameRules:
    prizes: tuple[int, ...]
    fireproof_levels: tuple[int, ...]
    time_limit: timedelta

    def __post_init__(self) -> None:
        if len(self.prizes) != len(QUESTION_LEVELS):
            raise ValueError(f"payout table must have {len(QUESTION_LEVELS)} entries, got {len(self.prizes)}")
        if any(prize <= 0 for prize in self.prizes):
            raise ValueError("payout table entries must be positive")
        if any(later <= earlier for earlier, later in zip(self.prizes, self.prizes[1:])):
            raise ValueError("payout table must be strictly increasing")
        if any(level not in QUESTION_LEVELS for level in self.fireproof_levels):
            raise ValueError("fireproof levels must be valid question levels")
        if list(self.fireproof_levels) != sorted(set(self.fireproof_levels)):
            raise ValueError("fireproof levels must be unique and ascending")
        if self.time_limit <= timedelta(0):
            raise ValueError("time limit must be positive")

    @property
    def max_prize(self) -> int:
        return self.prizes[-1]


@dataclass(slots=True)
class GameQuestion:
    """A question as it appears inside one game.

    ``slots`` maps each answer letter to the stored answer slot (1..4) and is
    fixed when the game is built, so the correct answer lands under a random
    letter. ``help_hash`` collects help payloads keyed by ``HelpKind.value``.
    """

    question: Question
    slots: dict[str, int]
    help_hash: dict[str, object] = field(default_factory=dict)
    game_question_id: int | None = None

    def __post_init__(self) -> None:
        if sorted(self.slots) != list(ANSWER_KEYS) or sorted(self.slots.values()) != list(ANSWER_SLOTS):
            raise ValueError(f"answer slots must map a..d onto 1..4, got {self.slots}")

    @property
    def level(self) -> int:
        return self.question.level

    @property
    def text(self) -> str:
        return self.question.text

    @property
    def variants(self) -> dict[str, str]:
        return {key: self.question.answer_for_slot(self.slots[key]) for key in ANSWER_KEYS}

    @property
    def correct_answer_key(self) -> str:
        return next(key for key in ANSWER_KEYS if self.slots[key] == CORRECT_ANSWER_SLOT)

    @property
    def correct_answer(self) -> str:
        return self.question.answer_for_slot(CORRECT_ANSWER_SLOT)

    def answer_correct(self, letter: object) -> bool:
        if not isinstance(letter, str):
            return False
        return letter.lower() == self.correct_answer_key

    def keys_to_use_in_help(self) -> tuple[str, ...]:
        remaining = self.help_hash.get(HelpKind.FIFTY_FIFTY.value)
        if remaining:
            return tuple(str(key) for key in remaining)
        return ANSWER_KEYS


@dataclass(slots=True)
class Game:
    user_id: int
    game_questions: list[GameQuestion]
    created_at: datetime
    current_level: int = 0
    prize: int = 0
    finished_at: datetime | None = None
    is_failed: bool = False
    fifty_fifty_used: bool = False
    audience_help_used: bool = False
    friend_call_used: bool = False
    game_id: int | None = None

    @property
    def finished(self) -> bool:
        return self.finished_at is not None

    @property
    def previous_level(self) -> int:
        return self.current_level - 1

    @property
    def current_game_question(self) -> GameQuestion | None:
        return self._question_at(self.current_level)

    @property
    def previous_game_question(self) -> GameQuestion | None:
        return self._question_at(self.previous_level)

    def help_used(self, kind: HelpKind) -> bool:
        return bool(getattr(self, kind.flag_name))

    def _question_at(self, level: int) -> GameQuestion | None:
        for game_question in self.game_questions:
            if game_question.level == level:
                return game_question
        return None


@dataclass(slots=True)
class AnswerOutcome:
    game: Game
    is_correct: bool
    status: GameStatus
    credited_amount: int = 0


@dataclass(slots=True)
class CashOutOutcome:
    game: Game
    status: GameStatus
    credited_amount: int
    balance: int | None = None


@dataclass(slots=True)
class HelpOutcome:
    game: Game
    kind: HelpKind
    status: GameStatus
    payload: object = None
