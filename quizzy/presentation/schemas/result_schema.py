from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ...domain.entities import ResultRecord


class AnswerIn(BaseModel):
    question_id: int
    # null or a missing key both mean the question was skipped
    selected_option: Optional[int] = None
    section: Optional[str] = None


class QuizSubmission(BaseModel):
    answers: List[AnswerIn] = []
    time_spent: int = Field(0, ge=0)  # seconds


class ScoringConfigOut(BaseModel):
    negative_marking: bool
    negative_mark_value: float


class ResultOut(BaseModel):
    id: Optional[int] = None
    user_id: int
    quiz_id: Optional[int] = None
    quiz_name: str
    subject: str
    chapter: str
    submitted_at: datetime
    total_score: int
    section_scores: Dict[str, int]
    correct: int
    wrong: int
    unanswered: int
    total_questions: int
    positive_marks: float
    negative_marks: float
    net_marks: float
    time_spent: int
    scoring_config: ScoringConfigOut

    @classmethod
    def from_record(cls, record: ResultRecord) -> "ResultOut":
        return cls(
            id=record.id,
            user_id=record.user_id,
            quiz_id=record.quiz_id,
            quiz_name=record.display_quiz_name,
            subject=record.display_subject_name,
            chapter=record.display_chapter_name,
            submitted_at=record.submitted_at,
            total_score=record.total_score,
            section_scores=dict(record.section_scores),
            correct=record.correct,
            wrong=record.wrong,
            unanswered=record.unanswered,
            total_questions=record.total_questions,
            positive_marks=record.positive_marks,
            negative_marks=record.negative_marks,
            net_marks=record.net_marks,
            time_spent=record.time_spent,
            scoring_config=ScoringConfigOut(
                negative_marking=record.scoring_config.negative_marking,
                negative_mark_value=record.scoring_config.negative_mark_value,
            ),
        )
