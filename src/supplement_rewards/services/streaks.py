"""Consecutive-day streak tracking for supplement intake."""

from dataclasses import dataclass, field, replace
from datetime import date

from supplement_rewards.domain.dates import days_between
from supplement_rewards.domain.models import UserRewardsSummary


@dataclass(frozen=True)
class StreakBonus:
    """One-time coin bonus paid the day a streak reaches a milestone."""

    streak: int
    coins: int
    title: str


DEFAULT_STREAK_BONUSES = (
    StreakBonus(streak=7, coins=50, title="7-day streak bonus!"),
    StreakBonus(streak=30, coins=200, title="30-day streak bonus!"),
)


@dataclass(frozen=True)
class StreakUpdate:
    """Summary after an activity plus any bonuses it triggered."""

    summary: UserRewardsSummary
    bonuses: list[StreakBonus]


@dataclass(frozen=True)
class StreakEngine:
    """Computes streak transitions on a supplement-taken event."""

    bonuses: tuple[StreakBonus, ...] = field(default=DEFAULT_STREAK_BONUSES)

    def record_activity(self, summary: UserRewardsSummary, today: date) -> StreakUpdate:
        """Apply an activity on ``today`` to the summary.

        Bonus coins are already included in ``total_coins_earned`` of the
        returned summary; the caller records the matching transactions.
        """
        current = summary.current_streak
        longest = summary.longest_streak
        earned = summary.total_coins_earned
        triggered: list[StreakBonus] = []

        if summary.last_activity_date is None:
            current = 1
        else:
            delta = days_between(summary.last_activity_date, today)
            if delta == 1:
                current += 1
                longest = max(longest, current)
                for bonus in self.bonuses:
                    if current == bonus.streak:
                        triggered.append(bonus)
                        earned += bonus.coins
            elif delta != 0:
                # Gap of two or more days, or a clock that moved backwards.
                current = 1

        updated = replace(
            summary,
            current_streak=current,
            longest_streak=longest,
            total_coins_earned=earned,
            last_activity_date=today,
        )
        return StreakUpdate(summary=updated, bonuses=triggered)
