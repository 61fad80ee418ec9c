from sqlalchemy import Column, Integer, ForeignKey, DateTime, Boolean, String, Float, JSON
from sqlalchemy.orm import relationship
from ..base import Base


class ResultModel(Base):
    __tablename__ = "quiz_results"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="SET NULL"), nullable=True)

    # Display names as they were at submission time
    quiz_name = Column(String, nullable=True)
    subject_name = Column(String, nullable=True)
    chapter_name = Column(String, nullable=True)

    submitted_at = Column(DateTime(timezone=True), nullable=False, index=True)
    total_score = Column(Integer, nullable=False)
    section_scores = Column(JSON, nullable=False, default=dict)
    correct = Column(Integer, nullable=False, default=0)
    wrong = Column(Integer, nullable=False, default=0)
    unanswered = Column(Integer, nullable=False, default=0)
    positive_marks = Column(Float, nullable=False, default=0)
    negative_marks = Column(Float, nullable=False, default=0)
    net_marks = Column(Float, nullable=False, default=0)
    time_spent = Column(Integer, nullable=False, default=0)  # seconds

    # Scoring config used, kept for audit
    negative_marking = Column(Boolean, nullable=False, default=False)
    negative_mark_value = Column(Float, nullable=False, default=0)

    # Relationships
    user = relationship("UserModel", back_populates="results")
    quiz = relationship("QuizModel")
