import logging
from datetime import tzinfo
from zoneinfo import ZoneInfo

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..application.analytics import ActivityTracker, AnalyticsAggregator, GoalEvaluator
from ..application.scoring import ScoreCalculator
from ..config import settings
from ..infrastructure.db.session import SessionLocal
from ..infrastructure.security.jwt_service import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(token: str = Depends(oauth2_scheme)) -> dict:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
    logger.debug(f"Validated token for user_id: {user_id}")
    return {"user_id": user_id, "role": payload.get("role", "USER")}


def admin_required(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") != "ADMIN":
        logger.warning(
            f"Access denied for non-admin user_id: {current_user.get('user_id')}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrative privileges required",
        )
    logger.info(f"Admin access granted for user_id: {current_user.get('user_id')}")
    return current_user


# --------------------------------------------------
# Engine factories
# --------------------------------------------------
def get_timezone() -> tzinfo:
    return ZoneInfo(settings.TIMEZONE)


def get_score_calculator() -> ScoreCalculator:
    return ScoreCalculator()


def get_aggregator() -> AnalyticsAggregator:
    return AnalyticsAggregator(
        recent_limit=settings.RECENT_ATTEMPTS_LIMIT,
        trend_days=settings.TREND_WINDOW_DAYS,
        tz=get_timezone(),
    )


def get_activity_tracker() -> ActivityTracker:
    return ActivityTracker(window_days=settings.ACTIVITY_WINDOW_DAYS, tz=get_timezone())


def get_goal_evaluator() -> GoalEvaluator:
    return GoalEvaluator(tz=get_timezone())
