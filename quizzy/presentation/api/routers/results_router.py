import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ....application.analytics.aggregator import DASHBOARD_RECENT_LIMIT, recent_attempts
from ....domain.errors import NotFoundError
from ....infrastructure.repositories.result_repository import ResultRepository
from ...dependencies import get_current_user, get_db
from ...schemas.result_schema import ResultOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/results", tags=["Results"])


@router.get("", response_model=List[ResultOut])
def list_results(db: Session = Depends(get_db), current_user: dict = Depends(get_current_user)):
    user_id = current_user["user_id"]
    try:
        records = ResultRepository(db).get_user_results(user_id)
        return [ResultOut.from_record(r) for r in records]
    except Exception as e:
        logger.error(f"Error fetching results for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/recent", response_model=List[ResultOut])
def list_recent_results(
    limit: int = Query(DASHBOARD_RECENT_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    user_id = current_user["user_id"]
    try:
        records = ResultRepository(db).get_user_results(user_id)
        return [ResultOut.from_record(r) for r in recent_attempts(records, limit)]
    except Exception as e:
        logger.error(f"Error fetching recent results for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/{result_id}", response_model=ResultOut)
def get_result(
    result_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    # admins may read any record, students only their own
    owner = None if current_user.get("role") == "ADMIN" else current_user["user_id"]
    try:
        return ResultOut.from_record(ResultRepository(db).get_result(result_id, owner))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
