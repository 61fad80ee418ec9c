import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ....application.scoring import ScoreCalculator
from ....domain.entities import SubmittedAnswer
from ....domain.errors import NotFoundError
from ....infrastructure.repositories.quiz_repository import QuizRepository
from ....infrastructure.repositories.result_repository import ResultRepository
from ...dependencies import get_current_user, get_db, get_score_calculator
from ...schemas.result_schema import QuizSubmission, ResultOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


@router.post("/{quiz_id}/submit", response_model=ResultOut, status_code=status.HTTP_201_CREATED)
def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
    calculator: ScoreCalculator = Depends(get_score_calculator),
):
    """
    Scores a submitted attempt and stores the resulting record.
    """
    user_id = current_user.get("user_id")
    try:
        logger.info(f"User {user_id} submitting quiz {quiz_id} with {len(submission.answers)} answers")
        quiz, questions, config = QuizRepository(db).load_for_scoring(quiz_id)
        answers = [
            SubmittedAnswer.from_raw(a.question_id, a.selected_option, a.section)
            for a in submission.answers
        ]
        record = calculator.score(
            answers,
            questions,
            config,
            user_id=user_id,
            quiz=quiz,
            time_spent=submission.time_spent,
        )
        stored = ResultRepository(db).store_result(record)
        logger.info(f"User {user_id} scored {stored.total_score}% on quiz {quiz_id}")
        return ResultOut.from_record(stored)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        logger.warning(f"Validation error scoring quiz {quiz_id} for user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error scoring quiz {quiz_id} for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred.",
        )
