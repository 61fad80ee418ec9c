from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from ...application.analytics import ActivitySummary, PerformanceSummary, Rollup
from .result_schema import ResultOut


class RollupOut(BaseModel):
    subject: str
    chapter: Optional[str] = None
    attempts: int
    total_score: int
    best_score: int
    average_score: int

    @classmethod
    def from_rollup(cls, rollup: Rollup) -> "RollupOut":
        return cls(
            subject=rollup.subject,
            chapter=rollup.chapter,
            attempts=rollup.attempts,
            total_score=rollup.total_score,
            best_score=rollup.best_score,
            average_score=rollup.average_score,
        )


class TrendPointOut(BaseModel):
    date: datetime
    score: int
    quiz_name: str


class PerformanceSummaryOut(BaseModel):
    total_attempts: int
    average_score: int
    best_score: Optional[int] = None
    recent_attempts: List[ResultOut]
    subject_stats: List[RollupOut]
    chapter_stats: List[RollupOut]
    performance_trend: List[TrendPointOut]

    @classmethod
    def from_summary(cls, summary: PerformanceSummary) -> "PerformanceSummaryOut":
        return cls(
            total_attempts=summary.total_attempts,
            average_score=summary.average_score,
            best_score=summary.best_score,
            recent_attempts=[ResultOut.from_record(r) for r in summary.recent_attempts],
            subject_stats=[RollupOut.from_rollup(r) for r in summary.subject_stats],
            chapter_stats=[RollupOut.from_rollup(r) for r in summary.chapter_stats],
            performance_trend=[
                TrendPointOut(date=p.submitted_at, score=p.score, quiz_name=p.quiz_name)
                for p in summary.performance_trend
            ],
        )


class ActivityDayOut(BaseModel):
    date: date
    count: int
    level: int


class ActivitySummaryOut(BaseModel):
    days: List[ActivityDayOut]
    current_streak: int
    longest_streak: int
    total_attempts: int

    @classmethod
    def from_summary(cls, summary: ActivitySummary) -> "ActivitySummaryOut":
        return cls(
            days=[ActivityDayOut(date=d.date, count=d.count, level=d.level) for d in summary.days],
            current_streak=summary.current_streak,
            longest_streak=summary.longest_streak,
            total_attempts=summary.total_attempts,
        )
