from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from functools import singledispatch
from typing import Any, Callable, List, Optional, Sequence, Union

from ...domain.entities import ResultRecord
from ...domain.errors import MissingSectionTarget, UnknownGoalType
from ...domain.goals import (
    AverageScoreGoal,
    Goal,
    GoalStatus,
    SectionScoreGoal,
    StreakGoal,
    TotalAttemptsGoal,
)
from ...utils.helpers import percent_half_up, round_half_up, to_local_date, utc_now
from .activity_tracker import ActivityTracker
from .aggregator import average_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalContext:
    records: Sequence[ResultRecord]
    now: datetime
    tz: tzinfo = timezone.utc


@dataclass(frozen=True)
class GoalEvaluation:
    goal: Goal
    current: float
    status: GoalStatus
    progress: int


@dataclass(frozen=True)
class GoalFailure:
    goal: object
    error: Exception


# ---------------------------
# Current value per variant
# ---------------------------

@singledispatch
def current_value(goal, context: GoalContext) -> float:
    raise UnknownGoalType(getattr(goal, "goal_type", type(goal).__name__))


@current_value.register
def _(goal: AverageScoreGoal, context: GoalContext) -> float:
    return average_score(context.records)


@current_value.register
def _(goal: TotalAttemptsGoal, context: GoalContext) -> float:
    return len(context.records)


@current_value.register
def _(goal: StreakGoal, context: GoalContext) -> float:
    tracker = ActivityTracker(tz=context.tz)
    summary = tracker.track((r.submitted_at for r in context.records), today=context.now)
    return summary.current_streak


@current_value.register
def _(goal: SectionScoreGoal, context: GoalContext) -> float:
    if not goal.target_section:
        raise MissingSectionTarget(goal.id)
    scores = []
    for record in context.records:
        value = (record.section_scores or {}).get(goal.target_section)
        if value:
            scores.append(value)
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


# ---------------------------
# Status
# ---------------------------

def decide_status(goal: Goal, current: float, now: datetime, tz: tzinfo = timezone.utc) -> GoalStatus:
    """Target met wins over an elapsed deadline; the deadline day itself is still open."""
    if current >= goal.target:
        return GoalStatus.COMPLETED
    if goal.deadline is not None and to_local_date(now, tz) > goal.deadline:
        return GoalStatus.EXPIRED
    return GoalStatus.ACTIVE


def progress_percent(current: float, target: float) -> int:
    if target <= 0:
        return 100
    return min(100, percent_half_up(current, target))


class GoalEvaluator:
    """Recomputes goal progress and status from the full result history."""

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def evaluate(
        self, goal: Goal, records: Sequence[ResultRecord], now: Optional[datetime] = None
    ) -> GoalEvaluation:
        context = GoalContext(records=tuple(records or ()), now=now or utc_now(), tz=self.tz)
        current = current_value(goal, context)
        status = decide_status(goal, current, context.now, self.tz)
        return GoalEvaluation(
            goal=goal,
            current=current,
            status=status,
            progress=progress_percent(current, goal.target),
        )

    def evaluate_all(
        self,
        goals: Sequence[Any],
        records: Sequence[ResultRecord],
        now: Optional[datetime] = None,
        build: Optional[Callable[[Any], Goal]] = None,
    ) -> List[Union[GoalEvaluation, GoalFailure]]:
        """
        Evaluate every goal; a goal that fails does not stop the others.

        ``build`` turns each item into a Goal first (e.g. a stored row), so a
        row that cannot be parsed is isolated the same way. Outcomes keep the
        input order.
        """
        now = now or utc_now()
        records = tuple(records or ())
        outcomes: List[Union[GoalEvaluation, GoalFailure]] = []
        for item in goals:
            try:
                goal = build(item) if build else item
                outcomes.append(self.evaluate(goal, records, now))
            except Exception as e:
                logger.warning(f"Goal {getattr(item, 'id', None)} could not be evaluated: {e}")
                outcomes.append(GoalFailure(goal=item, error=e))
        return outcomes
