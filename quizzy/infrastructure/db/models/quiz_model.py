from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, Float, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class QuizModel(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    chapter_id = Column(Integer, ForeignKey("chapters.id", ondelete="SET NULL"), nullable=True)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    negative_marking = Column(Boolean, nullable=False, default=True)
    negative_mark_value = Column(Float, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    chapter = relationship("ChapterModel", back_populates="quizzes")
    questions = relationship(
        "QuestionModel",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="QuestionModel.order_index",
    )


# ---------------------------
# Questions
# ---------------------------
class QuestionModel(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False)
    section = Column(String, nullable=False)
    question_text = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # list of option strings
    correct_option = Column(Integer, nullable=False)  # index into options
    explanation = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    quiz = relationship("QuizModel", back_populates="questions")
