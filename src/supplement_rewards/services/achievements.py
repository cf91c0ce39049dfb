"""Achievement flags derived from the rewards summary."""

from collections.abc import Callable
from dataclasses import dataclass, replace

from supplement_rewards.domain.models import UserRewardsSummary


@dataclass(frozen=True)
class AchievementRule:
    """Threshold rule that unlocks one summary flag."""

    flag: str
    name: str
    icon: str
    condition: Callable[[UserRewardsSummary], bool]


ACHIEVEMENT_RULES = (
    AchievementRule(
        flag="has_first_step_achievement",
        name="First Step",
        icon="figure.walk",
        condition=lambda s: s.supplements_taken >= 1,
    ),
    AchievementRule(
        flag="has_week_warrior_achievement",
        name="Week Warrior",
        icon="flame.fill",
        condition=lambda s: s.current_streak >= 7,
    ),
    AchievementRule(
        flag="has_quiz_master_achievement",
        name="Quiz Master",
        icon="brain.head.profile",
        condition=lambda s: s.quizzes_completed >= 10,
    ),
    AchievementRule(
        flag="has_supplement_pro_achievement",
        name="Supplement Pro",
        icon="pills.fill",
        condition=lambda s: s.supplements_taken >= 50,
    ),
    AchievementRule(
        flag="has_thirty_day_streak_achievement",
        name="30 Day Streak",
        icon="calendar",
        condition=lambda s: s.current_streak >= 30,
    ),
    AchievementRule(
        flag="has_health_guru_achievement",
        name="Health Guru",
        icon="heart.fill",
        condition=lambda s: s.supplements_taken >= 100 and s.quizzes_completed >= 20,
    ),
)


@dataclass(frozen=True)
class AchievementBadge:
    """Display state of a single achievement."""

    name: str
    icon: str
    is_unlocked: bool


def evaluate_achievements(summary: UserRewardsSummary) -> UserRewardsSummary:
    """Return the summary with every reached flag set. Flags never reset."""
    unlocked = {
        rule.flag: True
        for rule in ACHIEVEMENT_RULES
        if not getattr(summary, rule.flag) and rule.condition(summary)
    }
    if not unlocked:
        return summary
    return replace(summary, **unlocked)


def newly_unlocked(
    before: UserRewardsSummary, after: UserRewardsSummary
) -> list[AchievementRule]:
    """Return the rules whose flags flipped between two summaries."""
    return [
        rule
        for rule in ACHIEVEMENT_RULES
        if getattr(after, rule.flag) and not getattr(before, rule.flag)
    ]


def achievement_badges(summary: UserRewardsSummary) -> list[AchievementBadge]:
    """Return all badges in display order with their unlocked state."""
    return [
        AchievementBadge(
            name=rule.name,
            icon=rule.icon,
            is_unlocked=bool(getattr(summary, rule.flag)),
        )
        for rule in ACHIEVEMENT_RULES
    ]
