"""Per-user performance statistics derived from a result history."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ...domain.entities import ResultRecord
from ...utils.helpers import round_half_up, to_local_date, utc_now

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 10
DASHBOARD_RECENT_LIMIT = 5
DEFAULT_TREND_DAYS = 30


def score_of(record: ResultRecord) -> int:
    """Total score clamped to [0, 100]; unusable values count as 0."""
    value = getattr(record, "total_score", None)
    if value is None or isinstance(value, bool):
        return 0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return int(min(100, max(0, round_half_up(value))))


def _submitted_at(record: ResultRecord) -> Optional[datetime]:
    moment = getattr(record, "submitted_at", None)
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


# ---------------------------
# Output structures
# ---------------------------

@dataclass(frozen=True)
class Rollup:
    key: str
    subject: str
    chapter: Optional[str]
    attempts: int
    total_score: int
    best_score: int
    average_score: int


@dataclass(frozen=True)
class TrendPoint:
    date: date
    submitted_at: datetime
    score: int
    quiz_name: str


class PerformanceTrend:
    """
    Chronological (date, score, quiz name) points inside the look-back window.

    Iterating is lazy and may be repeated; every pass walks the same snapshot.
    """

    def __init__(self, records: Sequence[ResultRecord], today: date, days: int = DEFAULT_TREND_DAYS,
                 tz: tzinfo = timezone.utc):
        self._records = tuple(records)
        self._start = today - timedelta(days=days)
        self._end = today
        self._tz = tz

    def __iter__(self) -> Iterator[TrendPoint]:
        # undated records have no place on a timeline
        inside = [
            r for r in self._records
            if _submitted_at(r) is not None
            and self._start <= to_local_date(_submitted_at(r), self._tz) <= self._end
        ]
        # sorted() is stable, so same-instant records keep submission order
        for record in sorted(inside, key=_submitted_at):
            moment = _submitted_at(record)
            yield TrendPoint(
                date=to_local_date(moment, self._tz),
                submitted_at=moment,
                score=score_of(record),
                quiz_name=record.display_quiz_name,
            )

    def __len__(self) -> int:
        return sum(1 for _ in self)


@dataclass(frozen=True)
class PerformanceSummary:
    total_attempts: int
    average_score: int
    best_score: Optional[int]
    recent_attempts: Tuple[ResultRecord, ...]
    subject_stats: Tuple[Rollup, ...]
    chapter_stats: Tuple[Rollup, ...]
    performance_trend: Tuple[TrendPoint, ...] = field(default_factory=tuple)


# ---------------------------
# Reductions
# ---------------------------

def average_score(records: Sequence[ResultRecord]) -> int:
    if not records:
        return 0
    return round_half_up(sum(score_of(r) for r in records) / len(records))


def best_score(records: Sequence[ResultRecord]) -> Optional[int]:
    if not records:
        return None
    return max(score_of(r) for r in records)


def _recency_key(pair):
    index, record = pair
    moment = _submitted_at(record)
    # undated records sort after every dated one
    return (moment is not None, moment.timestamp() if moment else 0.0, -index)


def recent_attempts(records: Sequence[ResultRecord], limit: int = DEFAULT_RECENT_LIMIT) -> List[ResultRecord]:
    """
    First ``limit`` records, newest first.
    Records submitted at the same instant keep their input order.
    """
    if limit <= 0:
        return []
    ordered = sorted(enumerate(records), key=_recency_key, reverse=True)
    return [record for _, record in ordered[:limit]]


def _rollup(records: Sequence[ResultRecord], by_chapter: bool) -> List[Rollup]:
    groups: Dict[str, dict] = {}
    for record in records:
        subject = record.display_subject_name
        chapter = record.display_chapter_name if by_chapter else None
        key = f"{subject} - {chapter}" if by_chapter else subject
        group = groups.setdefault(
            key, {"subject": subject, "chapter": chapter, "attempts": 0, "total": 0, "best": 0}
        )
        score = score_of(record)
        group["attempts"] += 1
        group["total"] += score
        group["best"] = max(group["best"], score)

    return [
        Rollup(
            key=key,
            subject=g["subject"],
            chapter=g["chapter"],
            attempts=g["attempts"],
            total_score=g["total"],
            best_score=g["best"],
            average_score=round_half_up(g["total"] / g["attempts"]),
        )
        for key, g in groups.items()
    ]


def subject_rollup(records: Sequence[ResultRecord]) -> List[Rollup]:
    return _rollup(records, by_chapter=False)


def chapter_rollup(records: Sequence[ResultRecord]) -> List[Rollup]:
    return _rollup(records, by_chapter=True)


def performance_trend(
    records: Sequence[ResultRecord],
    now: Optional[datetime] = None,
    days: int = DEFAULT_TREND_DAYS,
    tz: tzinfo = timezone.utc,
) -> PerformanceTrend:
    today = to_local_date(now or utc_now(), tz)
    return PerformanceTrend(records, today=today, days=days, tz=tz)


# ---------------------------
# Aggregator
# ---------------------------

class AnalyticsAggregator:
    """Builds a PerformanceSummary from one user's results. Never raises."""

    def __init__(self, recent_limit: int = DEFAULT_RECENT_LIMIT, trend_days: int = DEFAULT_TREND_DAYS,
                 tz: tzinfo = timezone.utc):
        self.recent_limit = recent_limit
        self.trend_days = trend_days
        self.tz = tz

    def summarize(self, records: Sequence[ResultRecord], now: Optional[datetime] = None) -> PerformanceSummary:
        records = list(records or [])
        now = now or utc_now()
        logger.debug(f"Summarizing {len(records)} results")
        return PerformanceSummary(
            total_attempts=len(records),
            average_score=average_score(records),
            best_score=best_score(records),
            recent_attempts=tuple(recent_attempts(records, self.recent_limit)),
            subject_stats=tuple(subject_rollup(records)),
            chapter_stats=tuple(chapter_rollup(records)),
            performance_trend=tuple(performance_trend(records, now, self.trend_days, self.tz)),
        )
