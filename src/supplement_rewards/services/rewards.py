"""Reward ledger: coin awards, transactions and the running summary."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import uuid4

from supplement_rewards.domain.dates import Clock, make_clock
from supplement_rewards.domain.errors import InsufficientCoinsError, ValidationError
from supplement_rewards.domain.models import (
    LOCAL_USER_ID,
    DailyRecord,
    QuizHistoryRecord,
    RewardTransaction,
    TransactionType,
    UserRewardsSummary,
)
from supplement_rewards.services.achievements import (
    AchievementBadge,
    achievement_badges,
    evaluate_achievements,
    newly_unlocked,
)
from supplement_rewards.services.daily_records import DailyRecordService
from supplement_rewards.services.store import EntityStore
from supplement_rewards.services.streaks import StreakEngine

_logger = logging.getLogger(__name__)

SUPPLEMENT_TAKEN_COINS = 5

SummaryListener = Callable[[UserRewardsSummary], None]


@dataclass(frozen=True)
class TakeResult:
    """Outcome of marking a supplement as taken."""

    coins_awarded: int
    summary: UserRewardsSummary


@dataclass(frozen=True)
class QuizSaveResult:
    """Outcome of recording a completed quiz."""

    record: QuizHistoryRecord
    summary: UserRewardsSummary


@dataclass
class RewardsLedger:
    """Appends reward transactions and keeps the summary reconciled with them.

    Every mutation returns the persisted summary and notifies subscribers
    after all writes have succeeded.
    """

    store: EntityStore
    daily_records: DailyRecordService
    streak_engine: StreakEngine = field(default_factory=StreakEngine)
    user_id: str = LOCAL_USER_ID
    clock: Clock = field(default_factory=make_clock)
    _listeners: list[SummaryListener] = field(
        default_factory=list, init=False, repr=False
    )

    def subscribe(self, listener: SummaryListener) -> Callable[[], None]:
        """Register a summary listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_or_create_summary(self) -> UserRewardsSummary:
        """Return the user's summary, creating an empty one if missing."""
        existing = self.store.get(UserRewardsSummary, self.user_id)
        if existing is not None:
            return existing
        summary = UserRewardsSummary(id=self.user_id)
        self.store.upsert(summary)
        return summary

    def mark_supplement_taken(
        self,
        supplement_id: str,
        supplement_name: str,
        day: date | datetime | None = None,
    ) -> TakeResult:
        """Mark a supplement taken for a day and award coins once per day."""
        now = self.clock()
        record = self.daily_records.get_or_create(
            supplement_id, supplement_name, day if day is not None else now
        )
        if record.is_taken:
            _logger.info(
                "Supplement already taken: supplement_id=%s day=%s",
                supplement_id,
                record.day,
            )
            return TakeResult(coins_awarded=0, summary=self.get_or_create_summary())

        before = self.get_or_create_summary()
        transactions = [
            self._new_transaction(
                TransactionType.SUPPLEMENT_TAKEN,
                SUPPLEMENT_TAKEN_COINS,
                f"Took {supplement_name}",
                related_id=supplement_id,
                timestamp=now,
            )
        ]
        summary = replace(
            before,
            total_coins_earned=before.total_coins_earned + SUPPLEMENT_TAKEN_COINS,
            supplements_taken=before.supplements_taken + 1,
        )
        streak = self.streak_engine.record_activity(summary, now.date())
        for bonus in streak.bonuses:
            _logger.info("Streak bonus: streak=%s coins=%s", bonus.streak, bonus.coins)
            transactions.append(
                self._new_transaction(
                    TransactionType.STREAK_BONUS,
                    bonus.coins,
                    bonus.title,
                    timestamp=now,
                )
            )
        summary = evaluate_achievements(streak.summary)
        taken = replace(
            record,
            is_taken=True,
            taken_at=now,
            coins_awarded=SUPPLEMENT_TAKEN_COINS,
            user_id=record.user_id or self.user_id,
        )

        self._commit(before, summary, transactions, records=[taken])
        _logger.info(
            "Supplement taken: supplement_id=%s coins=%s streak=%s",
            supplement_id,
            SUPPLEMENT_TAKEN_COINS,
            summary.current_streak,
        )
        return TakeResult(coins_awarded=SUPPLEMENT_TAKEN_COINS, summary=summary)

    def save_quiz_result(
        self,
        total_questions: int,
        correct_count: int,
        incorrect_count: int,
        coins_earned: int,
        difficulty: str | None = None,
    ) -> QuizSaveResult:
        """Append a quiz attempt and credit its coins. Quizzes never touch streaks."""
        now = self.clock()
        record = QuizHistoryRecord(
            id=str(uuid4()),
            attempt_date=now,
            total_questions=total_questions,
            correct_count=correct_count,
            incorrect_count=incorrect_count,
            coins_earned=coins_earned,
            difficulty=difficulty,
            user_id=self.user_id,
        )
        before = self.get_or_create_summary()
        transaction = self._new_transaction(
            TransactionType.QUIZ_COMPLETED,
            coins_earned,
            f"Quiz: {correct_count}/{total_questions} correct",
            timestamp=now,
        )
        summary = evaluate_achievements(
            replace(
                before,
                total_coins_earned=before.total_coins_earned + coins_earned,
                quizzes_completed=before.quizzes_completed + 1,
            )
        )

        self._commit(before, summary, [transaction], records=[record])
        _logger.info(
            "Quiz saved: correct=%s total=%s coins=%s",
            correct_count,
            total_questions,
            coins_earned,
        )
        return QuizSaveResult(record=record, summary=summary)

    def spend_coins(
        self, amount: int, title: str, related_id: str | None = None
    ) -> UserRewardsSummary:
        """Debit coins from the available balance."""
        if amount <= 0:
            raise ValidationError("Spend amount must be positive")
        before = self.get_or_create_summary()
        if amount > before.available_coins:
            raise InsufficientCoinsError(before.available_coins, amount)
        transaction = self._new_transaction(
            TransactionType.COINS_SPENT,
            -amount,
            title,
            related_id=related_id,
            timestamp=self.clock(),
        )
        summary = replace(before, total_coins_spent=before.total_coins_spent + amount)
        self._commit(before, summary, [transaction])
        _logger.info(
            "Coins spent: amount=%s balance=%s", amount, summary.available_coins
        )
        return summary

    def add_transaction(
        self,
        type: TransactionType,
        coins: int,
        title: str,
        related_id: str | None = None,
    ) -> UserRewardsSummary:
        """Record a manual earning and credit it to the summary."""
        if coins < 0:
            raise ValidationError("Use spend_coins for debits")
        before = self.get_or_create_summary()
        transaction = self._new_transaction(
            type, coins, title, related_id=related_id, timestamp=self.clock()
        )
        summary = evaluate_achievements(
            replace(before, total_coins_earned=before.total_coins_earned + coins)
        )
        self._commit(before, summary, [transaction])
        return summary

    def transactions(self, limit: int | None = 20) -> list[RewardTransaction]:
        """Return the user's transactions, newest first."""
        return list(
            self.store.query(
                RewardTransaction,
                order_by=lambda tx: tx.timestamp,
                descending=True,
                limit=limit,
                user_id=self.user_id,
            )
        )

    def quiz_history(self, limit: int | None = 10) -> list[QuizHistoryRecord]:
        """Return the user's quiz attempts, newest first."""
        return list(
            self.store.query(
                QuizHistoryRecord,
                order_by=lambda record: record.attempt_date,
                descending=True,
                limit=limit,
                user_id=self.user_id,
            )
        )

    def earned_today(self) -> int:
        """Return coins earned during today's calendar day."""
        now = self.clock()
        today = now.date()
        return sum(
            tx.coins
            for tx in self.transactions(limit=None)
            if tx.coins > 0 and _local_day(tx.timestamp, now) == today
        )

    def achievements(self) -> list[AchievementBadge]:
        """Return all achievement badges for the user."""
        return achievement_badges(self.get_or_create_summary())

    def reconcile(self) -> UserRewardsSummary:
        """Recompute totals and counters from stored records and persist fixes.

        Coins come from the transactions, ``supplements_taken`` from taken
        daily records and ``quizzes_completed`` from the quiz history.
        """
        summary = self.get_or_create_summary()
        transactions = self.transactions(limit=None)
        taken = self.store.query(
            DailyRecord,
            predicate=lambda record: record.is_taken,
            user_id=self.user_id,
        )
        corrected = evaluate_achievements(
            replace(
                summary,
                total_coins_earned=sum(tx.coins for tx in transactions if tx.coins > 0),
                total_coins_spent=-sum(tx.coins for tx in transactions if tx.coins < 0),
                supplements_taken=len(taken),
                quizzes_completed=len(self.quiz_history(limit=None)),
            )
        )
        if corrected == summary:
            return summary
        _logger.warning(
            "Summary out of sync with stored records: "
            "earned=%s/%s spent=%s/%s taken=%s/%s quizzes=%s/%s",
            summary.total_coins_earned,
            corrected.total_coins_earned,
            summary.total_coins_spent,
            corrected.total_coins_spent,
            summary.supplements_taken,
            corrected.supplements_taken,
            summary.quizzes_completed,
            corrected.quizzes_completed,
        )
        self._commit(summary, corrected, [])
        return corrected

    def _new_transaction(
        self,
        type: TransactionType,
        coins: int,
        title: str,
        timestamp: datetime,
        related_id: str | None = None,
    ) -> RewardTransaction:
        return RewardTransaction(
            id=str(uuid4()),
            type=type,
            coins=coins,
            title=title,
            timestamp=timestamp,
            related_id=related_id,
            user_id=self.user_id,
        )

    def _commit(
        self,
        before: UserRewardsSummary,
        summary: UserRewardsSummary,
        transactions: list[RewardTransaction],
        records: Sequence[DailyRecord | QuizHistoryRecord] = (),
    ) -> None:
        # Records go last so a non-atomic backend never marks a day taken
        # without its transaction and summary.
        self.store.upsert_many([*transactions, summary, *records])
        for rule in newly_unlocked(before, summary):
            _logger.info("Achievement unlocked: %s", rule.name)
        for listener in list(self._listeners):
            listener(summary)


def _local_day(timestamp: datetime, reference: datetime) -> date:
    if timestamp.tzinfo is not None and reference.tzinfo is not None:
        return timestamp.astimezone(reference.tzinfo).date()
    return timestamp.date()
