from .user_model import UserModel
from .subject_model import SubjectModel, ChapterModel
from .quiz_model import QuizModel, QuestionModel
from .result_model import ResultModel
from .goal_model import GoalModel

__all__ = [
    "UserModel",
    "SubjectModel",
    "ChapterModel",
    "QuizModel",
    "QuestionModel",
    "ResultModel",
    "GoalModel",
]
