import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ....application.analytics import ActivityTracker, AnalyticsAggregator
from ....infrastructure.repositories.result_repository import ResultRepository
from ...dependencies import get_activity_tracker, get_aggregator, get_current_user, get_db
from ...schemas.analytics_schema import ActivitySummaryOut, PerformanceSummaryOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=PerformanceSummaryOut)
def get_analytics(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
    aggregator: AnalyticsAggregator = Depends(get_aggregator),
):
    user_id = current_user["user_id"]
    try:
        records = ResultRepository(db).get_user_results(user_id)
    except Exception as e:
        logger.error(f"Error loading results for analytics of user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error when generating analytics")

    summary = aggregator.summarize(records)
    logger.info(f"Analytics for user {user_id}: {summary.total_attempts} attempts, average {summary.average_score}")
    return PerformanceSummaryOut.from_summary(summary)


@router.get("/activity", response_model=ActivitySummaryOut)
def get_activity(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
    tracker: ActivityTracker = Depends(get_activity_tracker),
):
    user_id = current_user["user_id"]
    try:
        records = ResultRepository(db).get_user_results(user_id)
    except Exception as e:
        logger.error(f"Error loading results for activity of user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error when generating activity")

    summary = tracker.track(r.submitted_at for r in records)
    return ActivitySummaryOut.from_summary(summary)
