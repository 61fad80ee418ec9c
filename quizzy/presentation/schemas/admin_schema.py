from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel

from ...application.analytics.admin_reports import AdminOverview, QuizPerformance
from .analytics_schema import PerformanceSummaryOut
from .result_schema import ResultOut


class QuizStatsOut(BaseModel):
    quiz_id: Optional[int] = None
    quiz_name: str
    attempts: int
    average_score: float
    best_score: int
    pass_rate: float


class WeeklyPointOut(BaseModel):
    week_start: date
    attempts: int
    average_score: float


class AdminOverviewOut(BaseModel):
    total_attempts: int
    average_score: float
    pass_rate: int
    top_performers: int
    average_time_minutes: int
    quiz_stats: List[QuizStatsOut]
    section_averages: Dict[str, int]
    weekly_trend: List[WeeklyPointOut]

    @classmethod
    def from_overview(cls, overview: AdminOverview) -> "AdminOverviewOut":
        return cls(
            total_attempts=overview.total_attempts,
            average_score=overview.average_score,
            pass_rate=overview.pass_rate,
            top_performers=overview.top_performers,
            average_time_minutes=overview.average_time_minutes,
            quiz_stats=[
                QuizStatsOut(
                    quiz_id=q.quiz_id,
                    quiz_name=q.quiz_name,
                    attempts=q.attempts,
                    average_score=q.average_score,
                    best_score=q.best_score,
                    pass_rate=q.pass_rate,
                )
                for q in overview.quiz_stats
            ],
            section_averages=dict(overview.section_averages),
            weekly_trend=[
                WeeklyPointOut(week_start=w.week_start, attempts=w.attempts, average_score=w.average_score)
                for w in overview.weekly_trend
            ],
        )


class QuizPerformanceOut(BaseModel):
    quiz_id: Optional[int] = None
    quiz_name: str
    attempts: List[ResultOut]
    total_attempts: int
    best_score: int
    average_score: int
    average_time: int

    @classmethod
    def from_performance(cls, perf: QuizPerformance) -> "QuizPerformanceOut":
        return cls(
            quiz_id=perf.quiz_id,
            quiz_name=perf.quiz_name,
            attempts=[ResultOut.from_record(r) for r in perf.attempts],
            total_attempts=perf.total_attempts,
            best_score=perf.best_score,
            average_score=perf.average_score,
            average_time=perf.average_time,
        )


class UserPerformanceOut(BaseModel):
    user_id: int
    total_quizzes: int
    average_score: int
    quiz_performance: List[QuizPerformanceOut]


class UserSummaryOut(BaseModel):
    user_id: int
    summary: Optional[PerformanceSummaryOut] = None
    error: Optional[str] = None  # set when this user's analytics failed
