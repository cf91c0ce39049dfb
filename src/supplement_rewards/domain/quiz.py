"""Quiz domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class QuizDifficulty(str, Enum):
    """Question difficulty and the coins paid for a correct answer."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def coins_reward(self) -> int:
        return _COINS_REWARD[self]


_COINS_REWARD = {
    QuizDifficulty.EASY: 5,
    QuizDifficulty.MEDIUM: 10,
    QuizDifficulty.HARD: 15,
}


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question from the question bank."""

    question: str
    options: list[str]
    correct_answer: str
    explanation: str | None = None
    category: str | None = None
    difficulty: QuizDifficulty = QuizDifficulty.MEDIUM
    id: str = field(default_factory=lambda: str(uuid4()))


# Lower bounds, checked in order.
_PERFORMANCE_LEVELS = (
    (90.0, "Excellent!"),
    (80.0, "Great Job!"),
    (70.0, "Good Work!"),
    (60.0, "Not Bad!"),
    (50.0, "Keep Trying!"),
)


@dataclass(frozen=True)
class QuizResult:
    """Outcome of a completed quiz session."""

    correct: int
    incorrect: int
    coins_earned: int
    date: datetime

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100

    @property
    def performance_level(self) -> str:
        for lower_bound, label in _PERFORMANCE_LEVELS:
            if self.percentage >= lower_bound:
                return label
        return "Need Practice!"
