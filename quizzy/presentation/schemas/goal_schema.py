from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: str
    target: float = Field(..., ge=0)
    section: Optional[str] = None
    deadline: date


class GoalOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    target: float
    section: Optional[str] = None
    deadline: date
    current: Optional[float] = None
    progress: Optional[int] = None
    status: Optional[str] = None
    error: Optional[str] = None  # set when this goal could not be evaluated
