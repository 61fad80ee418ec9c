from .activity_tracker import ActivityDay, ActivitySummary, ActivityTracker, intensity_level
from .aggregator import AnalyticsAggregator, PerformanceSummary, Rollup, TrendPoint
from .goal_evaluator import GoalEvaluation, GoalEvaluator, GoalFailure

__all__ = [
    "ActivityDay",
    "ActivitySummary",
    "ActivityTracker",
    "intensity_level",
    "AnalyticsAggregator",
    "PerformanceSummary",
    "Rollup",
    "TrendPoint",
    "GoalEvaluation",
    "GoalEvaluator",
    "GoalFailure",
]
