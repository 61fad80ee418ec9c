from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional, Tuple, Union

from ...utils.helpers import to_local_date, utc_now

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 365


def intensity_level(count: int) -> int:
    """Heatmap shade for a day's attempt count: 0, 1, 2, 3-4, 5+ -> 0..4."""
    if count >= 5:
        return 4
    if count >= 3:
        return 3
    if count == 2:
        return 2
    if count == 1:
        return 1
    return 0


@dataclass(frozen=True)
class ActivityDay:
    date: date
    count: int

    @property
    def level(self) -> int:
        return intensity_level(self.count)


@dataclass(frozen=True)
class ActivitySummary:
    days: Tuple[ActivityDay, ...]
    current_streak: int
    longest_streak: int
    total_attempts: int


class ActivityTracker:
    """
    Buckets attempt timestamps per calendar day over a fixed look-back
    window ending today (both ends inclusive) and derives streaks.
    """

    def __init__(self, window_days: int = DEFAULT_WINDOW_DAYS, tz: tzinfo = timezone.utc):
        self.window_days = window_days
        self.tz = tz

    def track(
        self,
        timestamps: Iterable[Union[datetime, date]],
        today: Optional[Union[datetime, date]] = None,
    ) -> ActivitySummary:
        today = to_local_date(today if today is not None else utc_now(), self.tz)
        start = today - timedelta(days=self.window_days)

        counts = Counter(
            day
            for day in (to_local_date(ts, self.tz) for ts in timestamps if ts is not None)
            if start <= day <= today
        )

        days = tuple(
            ActivityDay(date=start + timedelta(days=offset), count=counts.get(start + timedelta(days=offset), 0))
            for offset in range(self.window_days + 1)
        )

        summary = ActivitySummary(
            days=days,
            current_streak=current_streak(days),
            longest_streak=longest_streak(days),
            total_attempts=sum(counts.values()),
        )
        logger.debug(
            f"Activity: {summary.total_attempts} attempts, current streak {summary.current_streak}, "
            f"longest {summary.longest_streak}"
        )
        return summary


def current_streak(days: Tuple[ActivityDay, ...]) -> int:
    """Consecutive active days ending at the last day; 0 if the last day is idle."""
    streak = 0
    for day in reversed(days):
        if day.count == 0:
            break
        streak += 1
    return streak


def longest_streak(days: Tuple[ActivityDay, ...]) -> int:
    longest = run = 0
    for day in days:
        if day.count > 0:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest
