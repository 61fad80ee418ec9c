class QuizzyError(ValueError):
    """Base class for errors raised by the scoring and analytics engine."""


class MalformedInput(QuizzyError):
    """Submitted answers cannot be interpreted against the quiz."""


class InvalidConfig(QuizzyError):
    """Scoring configuration cannot be applied (e.g. a negative penalty)."""


class UnknownGoalType(QuizzyError):
    def __init__(self, goal_type):
        super().__init__(f"Unknown goal type: {goal_type!r}")
        self.goal_type = goal_type


class MissingSectionTarget(QuizzyError):
    def __init__(self, goal_id=None):
        super().__init__(f"Section-score goal {goal_id} has no target section")
        self.goal_id = goal_id


# ---------------------------
# Persistence lookups
# ---------------------------

class NotFoundError(ValueError):
    pass


class QuizNotFound(NotFoundError):
    pass


class ResultNotFound(NotFoundError):
    pass


class GoalNotFound(NotFoundError):
    pass
