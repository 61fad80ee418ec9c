import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ....application.analytics import GoalEvaluation, GoalEvaluator
from ....domain.errors import NotFoundError
from ....domain.goals import build_goal
from ....infrastructure.repositories.goal_repository import GoalRepository, to_goal
from ....infrastructure.repositories.result_repository import ResultRepository
from ....utils.helpers import utc_now
from ...dependencies import get_current_user, get_db, get_goal_evaluator
from ...schemas.goal_schema import GoalCreate, GoalOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["Goals"])


def _goal_out(row, outcome=None, error=None) -> GoalOut:
    out = GoalOut(
        id=row.id,
        title=row.title,
        description=row.description,
        type=row.goal_type,
        target=row.target,
        section=row.section,
        deadline=row.deadline,
        error=str(error) if error else None,
    )
    if isinstance(outcome, GoalEvaluation):
        out.current = outcome.current
        out.progress = outcome.progress
        out.status = outcome.status.value
    return out


def _evaluate_rows(rows, records, evaluator: GoalEvaluator) -> List[GoalOut]:
    # one broken goal must not hide the others
    outcomes = evaluator.evaluate_all(rows, records, utc_now(), build=to_goal)
    return [
        _goal_out(row, outcome) if isinstance(outcome, GoalEvaluation) else _goal_out(row, error=outcome.error)
        for row, outcome in zip(rows, outcomes)
    ]


@router.get("", response_model=List[GoalOut])
def list_goals(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
    evaluator: GoalEvaluator = Depends(get_goal_evaluator),
):
    """
    Lists the caller's goals with progress and status computed from their results.
    """
    user_id = current_user["user_id"]
    try:
        rows = GoalRepository(db).list_goal_rows(user_id)
        records = ResultRepository(db).get_user_results(user_id)
    except Exception as e:
        logger.error(f"Error loading goals for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return _evaluate_rows(rows, records, evaluator)


@router.post("", response_model=GoalOut, status_code=status.HTTP_201_CREATED)
def create_goal(
    data: GoalCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
    evaluator: GoalEvaluator = Depends(get_goal_evaluator),
):
    user_id = current_user["user_id"]
    try:
        goal = build_goal(
            goal_type=data.type,
            id=None,
            title=data.title,
            description=data.description,
            target=data.target,
            section=data.section,
            deadline=data.deadline,
        )
    except ValueError as e:
        logger.warning(f"Invalid goal from user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        row = GoalRepository(db).create_goal(user_id, goal)
        records = ResultRepository(db).get_user_results(user_id)
    except Exception as e:
        logger.error(f"Error creating goal for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return _evaluate_rows([row], records, evaluator)[0]


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    try:
        GoalRepository(db).delete_goal(current_user["user_id"], goal_id)
        return {"message": "Goal deleted successfully"}
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
