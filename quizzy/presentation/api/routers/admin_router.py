import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ....application.analytics import AnalyticsAggregator
from ....application.analytics.admin_reports import (
    build_overview,
    results_to_csv,
    summarize_by_user,
    user_quiz_performance,
)
from ....application.analytics.aggregator import average_score
from ....config import settings
from ....infrastructure.repositories.result_repository import ResultRepository
from ...dependencies import admin_required, get_aggregator, get_db
from ...schemas.admin_schema import AdminOverviewOut, QuizPerformanceOut, UserPerformanceOut, UserSummaryOut
from ...schemas.analytics_schema import PerformanceSummaryOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/analytics", response_model=AdminOverviewOut)
def admin_analytics(db: Session = Depends(get_db), admin: dict = Depends(admin_required)):
    try:
        records = ResultRepository(db).get_all_results()
        overview = build_overview(
            records,
            pass_mark=settings.PASS_MARK,
            top_performer_mark=settings.TOP_PERFORMER_MARK,
        )
        return AdminOverviewOut.from_overview(overview)
    except Exception as e:
        logger.error(f"Admin analytics failed for admin {admin['user_id']}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/users/summaries", response_model=List[UserSummaryOut])
def user_summaries(
    db: Session = Depends(get_db),
    admin: dict = Depends(admin_required),
    aggregator: AnalyticsAggregator = Depends(get_aggregator),
):
    """
    Performance summary for every user with results. A user whose summary
    cannot be built is listed with ``error`` instead of failing the request.
    """
    try:
        records = ResultRepository(db).get_all_results()
    except Exception as e:
        logger.error(f"Error loading results for user summaries: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    summaries, failures = summarize_by_user(records, aggregator)
    logger.info(f"Admin {admin['user_id']} built {len(summaries)} user summaries, {len(failures)} failed")
    response = [
        UserSummaryOut(user_id=user_id, summary=PerformanceSummaryOut.from_summary(summary))
        for user_id, summary in summaries.items()
    ]
    response += [UserSummaryOut(user_id=user_id, error=str(error)) for user_id, error in failures.items()]
    return sorted(response, key=lambda s: s.user_id)


@router.get("/users/{user_id}/performance", response_model=UserPerformanceOut)
def user_performance(user_id: int, db: Session = Depends(get_db), admin: dict = Depends(admin_required)):
    try:
        logger.info(f"Admin {admin['user_id']} fetching performance of user {user_id}")
        records = ResultRepository(db).get_user_results(user_id)
        return UserPerformanceOut(
            user_id=user_id,
            total_quizzes=len(records),
            average_score=average_score(records),
            quiz_performance=[QuizPerformanceOut.from_performance(p) for p in user_quiz_performance(records)],
        )
    except Exception as e:
        logger.error(f"Error building performance for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/results/export-csv")
def export_results_csv(db: Session = Depends(get_db), admin: dict = Depends(admin_required)):
    try:
        records = ResultRepository(db).get_all_results()
        content = results_to_csv(records)
        logger.info(f"Admin {admin['user_id']} exported {len(records)} results")
        return Response(
            content=content,
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="quiz-results.csv"'},
        )
    except Exception as e:
        logger.error(f"Results export failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
