"""Quiz question bank and session state machine."""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from supplement_rewards.domain.quiz import QuizDifficulty, QuizQuestion, QuizResult
from supplement_rewards.services.rewards import QuizSaveResult, RewardsLedger

_logger = logging.getLogger(__name__)

DEFAULT_QUESTION_COUNT = 5


@dataclass
class QuestionBank:
    """Source of quiz questions."""

    questions: list[QuizQuestion]

    def sample(
        self,
        difficulty: QuizDifficulty | None,
        count: int,
        rng: random.Random,
    ) -> list[QuizQuestion]:
        """Pick up to ``count`` questions in random order.

        Falls back to the whole bank when no question has the requested
        difficulty.
        """
        pool = self.questions
        if difficulty is not None:
            matching = [q for q in self.questions if q.difficulty == difficulty]
            if matching:
                pool = matching
        return rng.sample(pool, min(count, len(pool)))


class QuizStatus(str, Enum):
    """Lifecycle of a quiz session."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class QuizSession:
    """Sequences questions, scores revealed answers and records the result.

    Transitions that are not allowed in the current state are ignored and
    return ``False``.
    """

    bank: QuestionBank
    ledger: RewardsLedger
    question_count: int = DEFAULT_QUESTION_COUNT
    rng: random.Random = field(default_factory=random.Random)
    status: QuizStatus = field(default=QuizStatus.IDLE, init=False)
    questions: list[QuizQuestion] = field(default_factory=list, init=False)
    difficulty: QuizDifficulty | None = field(default=None, init=False)
    index: int = field(default=0, init=False)
    selected_answer: str | None = field(default=None, init=False)
    revealed: bool = field(default=False, init=False)
    correct_count: int = field(default=0, init=False)
    incorrect_count: int = field(default=0, init=False)
    coins_earned: int = field(default=0, init=False)
    saved: QuizSaveResult | None = field(default=None, init=False)

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.status is not QuizStatus.IN_PROGRESS:
            return None
        return self.questions[self.index]

    @property
    def progress(self) -> float:
        if self.status is QuizStatus.COMPLETED:
            return 1.0
        if not self.questions:
            return 0.0
        return self.index / len(self.questions)

    @property
    def result(self) -> QuizResult | None:
        if self.saved is None:
            return None
        return QuizResult(
            correct=self.correct_count,
            incorrect=self.incorrect_count,
            coins_earned=self.coins_earned,
            date=self.saved.record.attempt_date,
        )

    def load_questions(
        self, difficulty: QuizDifficulty | None = None
    ) -> list[QuizQuestion]:
        """Start a new session with freshly sampled questions."""
        self.reset()
        self.difficulty = difficulty
        self.questions = self.bank.sample(difficulty, self.question_count, self.rng)
        if self.questions:
            self.status = QuizStatus.IN_PROGRESS
        else:
            _logger.warning("Question bank is empty; quiz stays idle")
        return self.questions

    def select_answer(self, option: str) -> bool:
        """Select an option for the current question before it is revealed."""
        question = self.current_question
        if question is None or self.revealed or option not in question.options:
            return False
        self.selected_answer = option
        return True

    def reveal_answer(self) -> bool:
        """Reveal and score the selected answer. Scores at most once."""
        question = self.current_question
        if question is None or self.revealed or self.selected_answer is None:
            return False
        self.revealed = True
        if self.selected_answer == question.correct_answer:
            self.correct_count += 1
            self.coins_earned += question.difficulty.coins_reward
        else:
            self.incorrect_count += 1
        return True

    def next(self) -> bool:
        """Advance after a reveal, completing the quiz after the last question."""
        if self.status is not QuizStatus.IN_PROGRESS or not self.revealed:
            return False
        if self.index < len(self.questions) - 1:
            self.index += 1
            self._clear_answer()
            return True
        self.status = QuizStatus.COMPLETED
        self.saved = self.ledger.save_quiz_result(
            total_questions=len(self.questions),
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
            coins_earned=self.coins_earned,
            difficulty=self.difficulty.value if self.difficulty else None,
        )
        return True

    def previous(self) -> bool:
        """Go back one question. Its earlier answer is not restored."""
        if self.status is not QuizStatus.IN_PROGRESS or self.index == 0:
            return False
        self.index -= 1
        self._clear_answer()
        return True

    def reset(self) -> None:
        """Return to the idle state."""
        self.status = QuizStatus.IDLE
        self.questions = []
        self.difficulty = None
        self.index = 0
        self.correct_count = 0
        self.incorrect_count = 0
        self.coins_earned = 0
        self.saved = None
        self._clear_answer()

    def _clear_answer(self) -> None:
        self.selected_answer = None
        self.revealed = False
