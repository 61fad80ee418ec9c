from datetime import date, datetime, timedelta, timezone

import pytest

from quizzy.application.analytics import ActivityTracker, intensity_level

TODAY = date(2025, 6, 15)


def at(day, hour=10):
    return datetime(day.year, day.month, day.day, hour, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "count, level",
    [(0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (12, 4)],
)
def test_intensity_levels(count, level):
    assert intensity_level(count) == level


def test_empty_history():
    summary = ActivityTracker().track([], TODAY)

    assert len(summary.days) == 366
    assert summary.days[0].date == TODAY - timedelta(days=365)
    assert summary.days[-1].date == TODAY
    assert all(d.count == 0 and d.level == 0 for d in summary.days)
    assert summary.current_streak == 0
    assert summary.longest_streak == 0
    assert summary.total_attempts == 0


def test_gap_breaks_streak():
    stamps = [at(TODAY), at(TODAY - timedelta(days=1)), at(TODAY - timedelta(days=3))]
    summary = ActivityTracker().track(stamps, TODAY)

    assert summary.current_streak == 2
    assert summary.longest_streak == 2
    assert summary.total_attempts == 3


def test_no_activity_today_means_no_current_streak():
    stamps = [at(TODAY - timedelta(days=d)) for d in (1, 2, 3)]
    summary = ActivityTracker().track(stamps, TODAY)

    assert summary.current_streak == 0
    assert summary.longest_streak == 3


def test_only_today():
    summary = ActivityTracker().track([at(TODAY), at(TODAY, 18)], TODAY)

    assert summary.current_streak == 1
    assert summary.longest_streak == 1
    assert summary.days[-1].count == 2
    assert summary.days[-1].level == 2


def test_longest_streak_can_exceed_current():
    stamps = [at(TODAY - timedelta(days=d)) for d in (40, 41, 42, 43, 44)] + [at(TODAY)]
    summary = ActivityTracker().track(stamps, TODAY)

    assert summary.current_streak == 1
    assert summary.longest_streak == 5
    assert summary.longest_streak >= summary.current_streak


def test_attempts_outside_window_are_ignored():
    stamps = [at(TODAY - timedelta(days=365)), at(TODAY - timedelta(days=366)), at(TODAY + timedelta(days=1))]
    summary = ActivityTracker().track(stamps, TODAY)

    assert summary.total_attempts == 1
    assert summary.days[0].count == 1


def test_days_are_bucketed_in_tracker_timezone():
    ist = timezone(timedelta(hours=5, minutes=30))
    late_utc = datetime(2025, 6, 14, 20, 0, tzinfo=timezone.utc)  # 15th 01:30 in IST

    utc_summary = ActivityTracker().track([late_utc], TODAY)
    ist_summary = ActivityTracker(tz=ist).track([late_utc], TODAY)

    assert utc_summary.current_streak == 0
    assert ist_summary.current_streak == 1


def test_tracking_is_idempotent():
    stamps = [at(TODAY - timedelta(days=d)) for d in (0, 0, 1, 7, 8, 9)]
    tracker = ActivityTracker()

    assert tracker.track(stamps, TODAY) == tracker.track(stamps, TODAY)
