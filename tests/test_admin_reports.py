import csv
import io
from datetime import date, timedelta

from quizzy.application.analytics.admin_reports import (
    build_overview,
    results_to_csv,
    summarize_by_user,
    user_quiz_performance,
    weekly_trend,
)
from quizzy.application.analytics.aggregator import AnalyticsAggregator

from .conftest import NOW, make_record


def test_empty_overview():
    overview = build_overview([])

    assert overview.total_attempts == 0
    assert overview.average_score == 0
    assert overview.pass_rate == 0
    assert overview.quiz_stats == ()
    assert overview.weekly_trend == ()


def test_overview_statistics():
    records = [
        make_record(90, quiz_id=1, quiz_name="Q1", time_spent=600, sections={"english": 80}),
        make_record(55, quiz_id=1, quiz_name="Q1", time_spent=1200, sections={"english": 40, "reasoning": 70}),
        make_record(70, quiz_id=2, quiz_name="Q2", time_spent=300),
    ]

    overview = build_overview(records, pass_mark=60, top_performer_mark=80)

    assert overview.total_attempts == 3
    assert overview.average_score == 71.67
    assert overview.pass_rate == 67
    assert overview.top_performers == 1
    assert overview.average_time_minutes == 12  # 700s -> 11.67 min
    assert overview.section_averages == {"english": 60, "reasoning": 70}

    quizzes = {q.quiz_id: q for q in overview.quiz_stats}
    assert quizzes[1].attempts == 2
    assert quizzes[1].average_score == 72.5
    assert quizzes[1].best_score == 90
    assert quizzes[1].pass_rate == 50
    assert quizzes[2].quiz_name == "Q2"


def test_weekly_trend_groups_by_monday():
    monday = date(2025, 6, 9)
    start = NOW.replace(year=monday.year, month=monday.month, day=monday.day)
    records = [
        make_record(60, start),
        make_record(80, start + timedelta(days=6)),  # Sunday, same week
        make_record(40, start + timedelta(days=7)),  # next Monday
    ]

    points = weekly_trend(records)

    assert [p.week_start for p in points] == [monday, monday + timedelta(days=7)]
    assert [p.attempts for p in points] == [2, 1]
    assert [p.average_score for p in points] == [70, 40]


def test_user_quiz_performance():
    records = [
        make_record(60, NOW - timedelta(days=2), quiz_id=1, time_spent=100),
        make_record(75, NOW, quiz_id=1, time_spent=201),
        make_record(40, NOW, quiz_id=2, quiz_name=None),
    ]

    perf = {p.quiz_id: p for p in user_quiz_performance(records)}

    assert perf[1].total_attempts == 2
    assert perf[1].best_score == 75
    assert perf[1].average_score == 68  # 67.5
    assert perf[1].average_time == 151  # 150.5
    assert perf[1].attempts[0].total_score == 75
    assert perf[2].quiz_name == "Unknown Quiz"


class ExplodingAggregator(AnalyticsAggregator):
    def summarize(self, records, now=None):
        if records[0].user_id == 2:
            raise RuntimeError("corrupt history")
        return super().summarize(records, now)


def test_summarize_by_user_isolates_failures():
    records = [make_record(50, user_id=1), make_record(70, user_id=2), make_record(90, user_id=3)]

    summaries, failures = summarize_by_user(records, ExplodingAggregator(), NOW)

    assert set(summaries) == {1, 3}
    assert summaries[3].best_score == 90
    assert set(failures) == {2}


def test_results_to_csv():
    records = [
        make_record(80, record_id=1, sections={"english": 75}),
        make_record(50, record_id=2, subject=None, sections={"reasoning": 30}),
    ]

    rows = list(csv.DictReader(io.StringIO(results_to_csv(records))))

    assert len(rows) == 2
    assert rows[0]["total_score"] == "80"
    assert rows[1]["subject"] == "Unknown Subject"
    assert "section:english" in rows[0]
    assert "section:reasoning" in rows[0]


def test_results_to_csv_empty():
    content = results_to_csv([])

    assert content.splitlines()[0].startswith("id,user_id,quiz_id")
