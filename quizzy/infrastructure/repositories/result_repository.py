import logging
from datetime import timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from ...domain.entities import ResultRecord, ScoringConfig
from ...domain.errors import ResultNotFound
from ..db.models import ResultModel

logger = logging.getLogger(__name__)


def _aware(moment):
    # SQLite drops tzinfo; stored values are UTC
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_entity(row: ResultModel) -> ResultRecord:
    return ResultRecord(
        id=row.id,
        user_id=row.user_id,
        quiz_id=row.quiz_id,
        quiz_name=row.quiz_name or (row.quiz.title if row.quiz else None),
        subject_name=row.subject_name,
        chapter_name=row.chapter_name,
        submitted_at=_aware(row.submitted_at),
        total_score=row.total_score,
        section_scores=dict(row.section_scores or {}),
        correct=row.correct or 0,
        wrong=row.wrong or 0,
        unanswered=row.unanswered or 0,
        positive_marks=row.positive_marks or 0.0,
        negative_marks=row.negative_marks or 0.0,
        net_marks=row.net_marks or 0.0,
        time_spent=row.time_spent or 0,
        scoring_config=ScoringConfig(
            negative_marking=bool(row.negative_marking),
            negative_mark_value=row.negative_mark_value or 0.0,
        ),
    )


def to_model(record: ResultRecord) -> ResultModel:
    return ResultModel(
        user_id=record.user_id,
        quiz_id=record.quiz_id,
        quiz_name=record.quiz_name,
        subject_name=record.subject_name,
        chapter_name=record.chapter_name,
        submitted_at=record.submitted_at,
        total_score=record.total_score,
        section_scores=dict(record.section_scores),
        correct=record.correct,
        wrong=record.wrong,
        unanswered=record.unanswered,
        positive_marks=record.positive_marks,
        negative_marks=record.negative_marks,
        net_marks=record.net_marks,
        time_spent=record.time_spent,
        negative_marking=record.scoring_config.negative_marking,
        negative_mark_value=record.scoring_config.negative_mark_value,
    )


class ResultRepository:
    def __init__(self, db: Session):
        self.db = db

    def store_result(self, record: ResultRecord) -> ResultRecord:
        try:
            row = to_model(record)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Stored result {row.id} for user {record.user_id}, quiz {record.quiz_id}")
            return to_entity(row)
        except Exception as e:
            logger.error(f"Error storing result for user {record.user_id}: {e}", exc_info=True)
            self.db.rollback()
            raise

    def get_user_results(self, user_id: int, limit: Optional[int] = None) -> List[ResultRecord]:
        """Newest first; ties fall back to insertion order."""
        query = (
            self.db.query(ResultModel)
            .filter(ResultModel.user_id == user_id)
            .order_by(ResultModel.submitted_at.desc(), ResultModel.id.asc())
        )
        if limit:
            query = query.limit(limit)
        rows = query.all()
        logger.info(f"Fetched {len(rows)} results for user {user_id}")
        return [to_entity(r) for r in rows]

    def get_all_results(self) -> List[ResultRecord]:
        rows = (
            self.db.query(ResultModel)
            .order_by(ResultModel.submitted_at.desc(), ResultModel.id.asc())
            .all()
        )
        logger.info(f"Fetched {len(rows)} results across all users")
        return [to_entity(r) for r in rows]

    def get_result(self, result_id: int, user_id: Optional[int] = None) -> ResultRecord:
        query = self.db.query(ResultModel).filter(ResultModel.id == result_id)
        if user_id is not None:
            query = query.filter(ResultModel.user_id == user_id)
        row = query.first()
        if not row:
            logger.warning(f"Result {result_id} not found for user {user_id}")
            raise ResultNotFound(f"Result {result_id} not found")
        return to_entity(row)
