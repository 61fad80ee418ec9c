"""Admin-wide views over every user's results."""

from __future__ import annotations

import io
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ...domain.entities import ResultRecord
from ...utils.helpers import percent_half_up, round_half_up, to_local_date
from .aggregator import AnalyticsAggregator, PerformanceSummary, recent_attempts, score_of

logger = logging.getLogger(__name__)

DEFAULT_PASS_MARK = 60
DEFAULT_TOP_PERFORMER_MARK = 80


@dataclass(frozen=True)
class QuizStats:
    quiz_id: Any
    quiz_name: str
    attempts: int
    average_score: float
    best_score: int
    pass_rate: float


@dataclass(frozen=True)
class WeeklyPoint:
    week_start: date
    attempts: int
    average_score: float


@dataclass(frozen=True)
class AdminOverview:
    total_attempts: int
    average_score: float
    pass_rate: int
    top_performers: int
    average_time_minutes: int
    quiz_stats: Tuple[QuizStats, ...] = ()
    section_averages: Dict[str, int] = field(default_factory=dict)
    weekly_trend: Tuple[WeeklyPoint, ...] = ()


@dataclass(frozen=True)
class QuizPerformance:
    quiz_id: Any
    quiz_name: str
    attempts: Tuple[ResultRecord, ...]
    total_attempts: int
    best_score: int
    average_score: int
    average_time: int


# ---------------------------
# Overview
# ---------------------------

def _quiz_stats(records: Sequence[ResultRecord], pass_mark: int) -> List[QuizStats]:
    grouped: Dict[Any, List[ResultRecord]] = defaultdict(list)
    for record in records:
        grouped[record.quiz_id].append(record)

    stats = []
    for quiz_id, group in grouped.items():
        scores = [score_of(r) for r in group]
        stats.append(
            QuizStats(
                quiz_id=quiz_id,
                quiz_name=group[0].display_quiz_name,
                attempts=len(group),
                average_score=round_half_up(sum(scores) / len(scores), 2),
                best_score=max(scores),
                pass_rate=percent_half_up(sum(1 for s in scores if s >= pass_mark), len(scores), 2),
            )
        )
    return stats


def _section_averages(records: Sequence[ResultRecord]) -> Dict[str, int]:
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for record in records:
        for name, value in (record.section_scores or {}).items():
            if value is None:
                continue
            totals[name] += value
            counts[name] += 1
    return {name: round_half_up(totals[name] / counts[name]) for name in totals}


def weekly_trend(records: Sequence[ResultRecord]) -> List[WeeklyPoint]:
    """Average score per calendar week, weeks starting on Monday."""
    rows = []
    for record in records:
        if record.submitted_at is None:
            continue
        day = to_local_date(record.submitted_at)
        rows.append({"week_start": day - timedelta(days=day.weekday()), "score": score_of(record)})
    if not rows:
        return []

    df = pd.DataFrame(rows)
    weekly = df.groupby("week_start")["score"].agg(["count", "mean"]).sort_index()
    return [
        WeeklyPoint(
            week_start=week_start,
            attempts=int(row["count"]),
            average_score=round_half_up(float(row["mean"]), 2),
        )
        for week_start, row in weekly.iterrows()
    ]


def build_overview(
    records: Sequence[ResultRecord],
    pass_mark: int = DEFAULT_PASS_MARK,
    top_performer_mark: int = DEFAULT_TOP_PERFORMER_MARK,
) -> AdminOverview:
    records = list(records or [])
    if not records:
        return AdminOverview(
            total_attempts=0,
            average_score=0,
            pass_rate=0,
            top_performers=0,
            average_time_minutes=0,
        )

    scores = [score_of(r) for r in records]
    total_time = sum(max(0, r.time_spent or 0) for r in records)
    logger.info(f"Building admin overview over {len(records)} results")
    return AdminOverview(
        total_attempts=len(records),
        average_score=round_half_up(sum(scores) / len(scores), 2),
        pass_rate=percent_half_up(sum(1 for s in scores if s >= pass_mark), len(scores)),
        top_performers=sum(1 for s in scores if s >= top_performer_mark),
        average_time_minutes=round_half_up(total_time / len(records) / 60),
        quiz_stats=tuple(_quiz_stats(records, pass_mark)),
        section_averages=_section_averages(records),
        weekly_trend=tuple(weekly_trend(records)),
    )


# ---------------------------
# Per-user views
# ---------------------------

def user_quiz_performance(records: Sequence[ResultRecord]) -> List[QuizPerformance]:
    grouped: Dict[Any, List[ResultRecord]] = defaultdict(list)
    for record in records or []:
        grouped[record.quiz_id].append(record)

    performance = []
    for quiz_id, group in grouped.items():
        scores = [score_of(r) for r in group]
        total_time = sum(max(0, r.time_spent or 0) for r in group)
        performance.append(
            QuizPerformance(
                quiz_id=quiz_id,
                quiz_name=group[0].display_quiz_name,
                attempts=tuple(recent_attempts(group, limit=len(group))),
                total_attempts=len(group),
                best_score=max(scores),
                average_score=round_half_up(sum(scores) / len(scores)),
                average_time=round_half_up(total_time / len(group)),
            )
        )
    return performance


def summarize_by_user(
    records: Sequence[ResultRecord],
    aggregator: Optional[AnalyticsAggregator] = None,
    now: Optional[datetime] = None,
) -> Tuple[Dict[Any, PerformanceSummary], Dict[Any, Exception]]:
    """
    Run the aggregator once per user.
    Returns (summaries, failures); a failing user is logged and skipped.
    """
    aggregator = aggregator or AnalyticsAggregator()
    grouped: Dict[Any, List[ResultRecord]] = defaultdict(list)
    for record in records or []:
        grouped[record.user_id].append(record)

    summaries: Dict[Any, PerformanceSummary] = {}
    failures: Dict[Any, Exception] = {}
    for user_id, group in grouped.items():
        try:
            summaries[user_id] = aggregator.summarize(group, now)
        except Exception as e:
            logger.warning(f"Skipping analytics for user {user_id}: {e}", exc_info=True)
            failures[user_id] = e
    return summaries, failures


# ---------------------------
# Export
# ---------------------------

CSV_COLUMNS = [
    "id",
    "user_id",
    "quiz_id",
    "quiz_name",
    "subject",
    "chapter",
    "submitted_at",
    "total_score",
    "correct",
    "wrong",
    "unanswered",
    "time_spent",
    "negative_marking",
    "negative_mark_value",
]


def results_to_csv(records: Sequence[ResultRecord]) -> str:
    rows = []
    sections = set()
    for record in records or []:
        row = {
            "id": record.id,
            "user_id": record.user_id,
            "quiz_id": record.quiz_id,
            "quiz_name": record.display_quiz_name,
            "subject": record.display_subject_name,
            "chapter": record.display_chapter_name,
            "submitted_at": record.submitted_at.isoformat() if record.submitted_at else None,
            "total_score": score_of(record),
            "correct": record.correct,
            "wrong": record.wrong,
            "unanswered": record.unanswered,
            "time_spent": record.time_spent,
            "negative_marking": record.scoring_config.negative_marking,
            "negative_mark_value": record.scoring_config.negative_mark_value,
        }
        for name, value in (record.section_scores or {}).items():
            row[f"section:{name}"] = value
            sections.add(f"section:{name}")
        rows.append(row)

    columns = CSV_COLUMNS + sorted(sections)
    df = pd.DataFrame(rows, columns=columns)
    buffer = io.StringIO()
    df.to_csv(buffer, index=False)
    return buffer.getvalue()
