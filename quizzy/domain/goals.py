from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

from .errors import MissingSectionTarget, UnknownGoalType


class GoalType(str, enum.Enum):
    AVERAGE_SCORE = "average-score"
    TOTAL_ATTEMPTS = "total-attempts"
    DAILY_STREAK = "daily-streak"
    SECTION_SCORE = "section-score"


class GoalStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


# Names used by the old client-side goals page
LEGACY_GOAL_TYPES = {
    "score": GoalType.AVERAGE_SCORE,
    "attempts": GoalType.TOTAL_ATTEMPTS,
    "streak": GoalType.DAILY_STREAK,
    "section": GoalType.SECTION_SCORE,
}


def parse_goal_type(raw: Any) -> GoalType:
    if isinstance(raw, GoalType):
        return raw
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key in LEGACY_GOAL_TYPES:
            return LEGACY_GOAL_TYPES[key]
        try:
            return GoalType(key)
        except ValueError:
            pass
    raise UnknownGoalType(raw)


# ---------------------------
# Goal variants
# ---------------------------

@dataclass(frozen=True)
class Goal:
    id: Any
    title: str
    target: float
    deadline: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    goal_type = None

    @property
    def section(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class AverageScoreGoal(Goal):
    goal_type = GoalType.AVERAGE_SCORE


@dataclass(frozen=True)
class TotalAttemptsGoal(Goal):
    goal_type = GoalType.TOTAL_ATTEMPTS


@dataclass(frozen=True)
class StreakGoal(Goal):
    goal_type = GoalType.DAILY_STREAK


@dataclass(frozen=True)
class SectionScoreGoal(Goal):
    target_section: Optional[str] = None

    goal_type = GoalType.SECTION_SCORE

    def __post_init__(self):
        if not self.target_section:
            raise MissingSectionTarget(self.id)

    @property
    def section(self) -> Optional[str]:
        return self.target_section


AnyGoal = Union[AverageScoreGoal, TotalAttemptsGoal, StreakGoal, SectionScoreGoal]

GOAL_CLASSES = {
    GoalType.AVERAGE_SCORE: AverageScoreGoal,
    GoalType.TOTAL_ATTEMPTS: TotalAttemptsGoal,
    GoalType.DAILY_STREAK: StreakGoal,
    GoalType.SECTION_SCORE: SectionScoreGoal,
}


def build_goal(
    *,
    goal_type: Any,
    id: Any,
    title: str,
    target: float,
    deadline: date,
    description: Optional[str] = None,
    section: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> AnyGoal:
    """
    Construct the variant matching ``goal_type``.

    Raises UnknownGoalType for an unrecognized type and MissingSectionTarget
    for a section-score goal without a section.
    """
    kind = parse_goal_type(goal_type)
    fields = dict(
        id=id,
        title=title,
        target=target,
        deadline=deadline,
        description=description,
        created_at=created_at,
    )
    if kind is GoalType.SECTION_SCORE:
        return SectionScoreGoal(target_section=section, **fields)
    return GOAL_CLASSES[kind](**fields)

