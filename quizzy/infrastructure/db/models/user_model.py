from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..base import Base


class UserModel(Base):
    """Identity owner of results and goals; accounts are managed elsewhere."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    role = Column(String, nullable=False, default="USER")  # "ADMIN" or "USER"
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    results = relationship("ResultModel", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    goals = relationship("GoalModel", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
