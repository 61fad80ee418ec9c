import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest

from quizzy.domain.entities import Question, QuizMeta, ResultRecord, ScoringConfig

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def quiz_meta():
    return QuizMeta(id=1, title="Mock Test 1", subject_name="Aptitude", chapter_name="Ratios")


@pytest.fixture
def ten_questions():
    sections = ["reasoning"] * 4 + ["quantitative"] * 3 + ["english"] * 3
    return [
        Question(id=i, section=section, options=("A", "B", "C", "D"), correct_index=0)
        for i, section in enumerate(sections, start=1)
    ]


def make_record(
    score,
    submitted_at=NOW,
    *,
    user_id=1,
    quiz_id=1,
    quiz_name="Mock Test 1",
    subject="Aptitude",
    chapter="Ratios",
    sections=None,
    time_spent=600,
    record_id=None,
):
    return ResultRecord(
        id=record_id,
        user_id=user_id,
        quiz_id=quiz_id,
        quiz_name=quiz_name,
        subject_name=subject,
        chapter_name=chapter,
        submitted_at=submitted_at,
        total_score=score,
        section_scores=sections or {},
        correct=0,
        wrong=0,
        unanswered=0,
        time_spent=time_spent,
        scoring_config=ScoringConfig(),
    )


@pytest.fixture
def record_factory():
    return make_record
