import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from ...config import settings
from ...domain.entities import Question, QuizMeta, ScoringConfig
from ...domain.errors import QuizNotFound
from ..db.models import QuizModel

logger = logging.getLogger(__name__)


class QuizRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_quiz_model(self, quiz_id: int) -> QuizModel:
        quiz = self.db.query(QuizModel).filter(QuizModel.id == quiz_id).first()
        if not quiz or not quiz.is_active:
            logger.warning(f"Quiz {quiz_id} not found or inactive")
            raise QuizNotFound(f"Quiz {quiz_id} not found")
        return quiz

    def load_for_scoring(self, quiz_id: int) -> Tuple[QuizMeta, List[Question], ScoringConfig]:
        """
        Everything the score calculator needs for one quiz.
        """
        quiz = self.get_quiz_model(quiz_id)
        chapter = quiz.chapter
        meta = QuizMeta(
            id=quiz.id,
            title=quiz.title,
            subject_name=chapter.subject.name if chapter and chapter.subject else None,
            chapter_name=chapter.name if chapter else None,
        )
        questions = [
            Question(
                id=q.id,
                section=q.section,
                options=tuple(q.options or ()),
                correct_index=q.correct_option,
                explanation=q.explanation,
                tags=tuple(q.tags or ()),
            )
            for q in quiz.questions
        ]
        penalty = quiz.negative_mark_value
        if penalty is None:
            penalty = settings.DEFAULT_NEGATIVE_MARK_VALUE
        config = ScoringConfig(negative_marking=bool(quiz.negative_marking), negative_mark_value=penalty)
        logger.info(f"Loaded quiz {quiz_id} with {len(questions)} questions for scoring")
        return meta, questions, config
