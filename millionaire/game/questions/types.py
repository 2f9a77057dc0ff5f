from __future__ import annotations

from dataclasses import dataclass

QUESTION_LEVELS: range = range(15)
MAX_LEVEL = QUESTION_LEVELS[-1]
ANSWER_SLOTS: tuple[int, ...] = (1, 2, 3, 4)
# Stored answers always keep the right one in the first slot.
CORRECT_ANSWER_SLOT = 1


@dataclass(frozen=True, slots=True)
class Question:
    question_id: int | None
    level: int
    text: str
    answers: tuple[str, str, str, str]

    def __post_init__(self) -> None:
        if self.level not in QUESTION_LEVELS:
            raise ValueError(f"question level must be within 0..{MAX_LEVEL}, got {self.level}")
        if len(self.answers) != len(ANSWER_SLOTS):
            raise ValueError(f"question must have {len(ANSWER_SLOTS)} answers, got {len(self.answers)}")
        if not self.text.strip():
            raise ValueError("question text must not be empty")

    def answer_for_slot(self, slot: int) -> str:
        return self.answers[slot - 1]
