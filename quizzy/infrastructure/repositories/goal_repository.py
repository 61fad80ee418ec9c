import logging
from typing import List

from sqlalchemy.orm import Session

from ...domain.errors import GoalNotFound
from ...domain.goals import AnyGoal, build_goal
from ..db.models import GoalModel

logger = logging.getLogger(__name__)


def to_goal(row: GoalModel) -> AnyGoal:
    return build_goal(
        goal_type=row.goal_type,
        id=row.id,
        title=row.title,
        description=row.description,
        target=row.target,
        section=row.section,
        deadline=row.deadline,
        created_at=row.created_at,
    )


class GoalRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_goal(self, user_id: int, goal: AnyGoal) -> GoalModel:
        try:
            row = GoalModel(
                user_id=user_id,
                title=goal.title,
                description=goal.description,
                goal_type=goal.goal_type.value,
                target=goal.target,
                section=goal.section,
                deadline=goal.deadline,
            )
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.info(f"Created goal {row.id} ({row.goal_type}) for user {user_id}")
            return row
        except Exception as e:
            logger.error(f"Error creating goal for user {user_id}: {e}", exc_info=True)
            self.db.rollback()
            raise

    def list_goal_rows(self, user_id: int) -> List[GoalModel]:
        rows = (
            self.db.query(GoalModel)
            .filter(GoalModel.user_id == user_id)
            .order_by(GoalModel.id.asc())
            .all()
        )
        logger.info(f"Fetched {len(rows)} goals for user {user_id}")
        return rows

    def delete_goal(self, user_id: int, goal_id: int) -> None:
        row = (
            self.db.query(GoalModel)
            .filter(GoalModel.id == goal_id, GoalModel.user_id == user_id)
            .first()
        )
        if not row:
            logger.warning(f"Goal {goal_id} not found for user {user_id}")
            raise GoalNotFound(f"Goal {goal_id} not found")
        try:
            self.db.delete(row)
            self.db.commit()
            logger.info(f"Deleted goal {goal_id} for user {user_id}")
        except Exception as e:
            logger.error(f"Error deleting goal {goal_id}: {e}", exc_info=True)
            self.db.rollback()
            raise
