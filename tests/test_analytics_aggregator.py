from datetime import timedelta, timezone

from quizzy.application.analytics import AnalyticsAggregator
from quizzy.application.analytics.aggregator import (
    average_score,
    best_score,
    chapter_rollup,
    performance_trend,
    recent_attempts,
    subject_rollup,
)

from .conftest import NOW, make_record


def test_empty_history():
    summary = AnalyticsAggregator().summarize([], NOW)

    assert summary.total_attempts == 0
    assert summary.average_score == 0
    assert summary.best_score is None
    assert summary.recent_attempts == ()
    assert summary.subject_stats == ()
    assert summary.chapter_stats == ()
    assert summary.performance_trend == ()


def test_average_and_best():
    records = [make_record(s) for s in (70, 85, 90)]

    assert average_score(records) == 82  # 81.67
    assert best_score(records) == 90


def test_average_rounds_half_up():
    assert average_score([make_record(50), make_record(51)]) == 51


def test_recent_attempts_newest_first_and_stable():
    a = make_record(10, NOW - timedelta(days=2), quiz_name="a")
    b = make_record(20, NOW, quiz_name="b")
    c = make_record(30, NOW, quiz_name="c")
    d = make_record(40, NOW - timedelta(days=1), quiz_name="d")

    recent = recent_attempts([b, c, d, a], limit=3)

    assert [r.quiz_name for r in recent] == ["b", "c", "d"]
    assert recent_attempts([b, c, d, a], limit=0) == []


def test_subject_and_chapter_rollups_are_independent():
    records = [
        make_record(80, subject="Maths", chapter="Algebra"),
        make_record(61, subject="Maths", chapter="Algebra"),
        make_record(90, subject="Maths", chapter="Geometry"),
        make_record(40, subject="English", chapter="Grammar"),
    ]

    subjects = {r.subject: r for r in subject_rollup(records)}
    assert subjects["Maths"].attempts == 3
    assert subjects["Maths"].total_score == 231
    assert subjects["Maths"].best_score == 90
    assert subjects["Maths"].average_score == 77
    assert subjects["English"].average_score == 40

    chapters = {r.key: r for r in chapter_rollup(records)}
    assert set(chapters) == {"Maths - Algebra", "Maths - Geometry", "English - Grammar"}
    assert chapters["Maths - Algebra"].attempts == 2
    assert chapters["Maths - Algebra"].average_score == 71  # 70.5 rounds up
    assert sum(r.attempts for r in chapters.values()) == len(records)


def test_missing_names_degrade_to_unknown():
    records = [make_record(55, quiz_name=None, subject=None, chapter=None)]
    summary = AnalyticsAggregator().summarize(records, NOW)

    assert summary.subject_stats[0].subject == "Unknown Subject"
    assert summary.chapter_stats[0].key == "Unknown Subject - Unknown Chapter"
    assert summary.performance_trend[0].quiz_name == "Unknown Quiz"


def test_trend_window_and_order():
    records = [
        make_record(70, NOW, quiz_name="today"),
        make_record(60, NOW - timedelta(days=30), quiz_name="edge"),
        make_record(50, NOW - timedelta(days=31), quiz_name="too old"),
        make_record(65, NOW - timedelta(days=3), quiz_name="recent"),
    ]

    points = list(performance_trend(records, NOW))

    assert [p.quiz_name for p in points] == ["edge", "recent", "today"]
    assert [p.score for p in points] == [60, 65, 70]


def test_trend_is_restartable_and_stable_over_time():
    records = [make_record(70, NOW - timedelta(days=d)) for d in (1, 5, 40)]
    trend = performance_trend(records, NOW)

    assert list(trend) == list(trend)
    assert len(trend) == 2

    later = list(performance_trend(records, NOW + timedelta(days=2)))
    assert later == list(trend)


def test_malformed_scores_are_safe():
    records = [make_record(None), make_record(float("nan")), make_record(140), make_record(-5)]
    summary = AnalyticsAggregator().summarize(records, NOW)

    assert summary.best_score == 100
    assert summary.average_score == 25


def test_summary_is_idempotent():
    records = [make_record(s, NOW - timedelta(days=i)) for i, s in enumerate((40, 75, 90, 60))]
    aggregator = AnalyticsAggregator(recent_limit=2)

    first = aggregator.summarize(records, NOW)
    second = aggregator.summarize(records, NOW)

    assert first == second
    assert len(first.recent_attempts) == 2


def test_undated_records_are_left_off_the_timeline():
    undated = make_record(40, submitted_at=None, quiz_name="Undated")
    dated = make_record(80, NOW - timedelta(days=1))
    # negative offsets used to overflow on the earliest representable datetime
    aggregator = AnalyticsAggregator(tz=timezone(timedelta(hours=-5)))

    summary = aggregator.summarize([undated, dated], NOW)

    assert summary.total_attempts == 2
    assert summary.average_score == 60
    assert [p.score for p in summary.performance_trend] == [80]
    assert [r.quiz_name for r in summary.recent_attempts] == ["Mock Test 1", "Undated"]
