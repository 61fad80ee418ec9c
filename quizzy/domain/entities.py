from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

from .errors import MalformedInput

UNKNOWN_QUIZ = "Unknown Quiz"
UNKNOWN_SUBJECT = "Unknown Subject"
UNKNOWN_CHAPTER = "Unknown Chapter"

# Legacy clients mark a skipped question with -1
UNANSWERED_SENTINEL = -1


# ---------------------------
# Answer selection
# ---------------------------

@dataclass(frozen=True)
class Answered:
    index: int


class _Unanswered:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Unanswered"


Unanswered = _Unanswered()

Selection = Union[Answered, _Unanswered]


def normalize_selection(raw: Any) -> Selection:
    """
    Collapse the representations a client may send into a Selection.

    None, the -1 sentinel and an existing Selection are accepted; any other
    non-integer is rejected.
    """
    if raw is None or raw is Unanswered:
        return Unanswered
    if isinstance(raw, Answered):
        return raw
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise MalformedInput(f"Selected option must be an integer index, got {raw!r}")
    if raw == UNANSWERED_SENTINEL:
        return Unanswered
    if raw < 0:
        raise MalformedInput(f"Selected option index must be non-negative, got {raw}")
    return Answered(raw)


# ---------------------------
# Quiz content
# ---------------------------

@dataclass(frozen=True)
class Question:
    id: Any
    section: str
    options: Tuple[str, ...]
    correct_index: int
    explanation: Optional[str] = None
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: Any
    selection: Selection = Unanswered
    section: Optional[str] = None

    def __post_init__(self):
        # None, -1 and bare ints are accepted and stored as a Selection
        object.__setattr__(self, "selection", normalize_selection(self.selection))

    @classmethod
    def from_raw(cls, question_id, selected=None, section=None) -> "SubmittedAnswer":
        return cls(question_id=question_id, selection=selected, section=section)

    @property
    def is_answered(self) -> bool:
        return isinstance(self.selection, Answered)


@dataclass(frozen=True)
class ScoringConfig:
    negative_marking: bool = False
    negative_mark_value: float = 0.0

    @property
    def penalty(self) -> float:
        return self.negative_mark_value if self.negative_marking else 0.0


@dataclass(frozen=True)
class QuizMeta:
    """Display names denormalized onto every result."""

    id: Any
    title: Optional[str] = None
    subject_name: Optional[str] = None
    chapter_name: Optional[str] = None


# ---------------------------
# Scored attempt
# ---------------------------

@dataclass(frozen=True)
class ResultRecord:
    user_id: Any
    quiz_id: Any
    submitted_at: datetime
    total_score: int
    correct: int
    wrong: int
    unanswered: int
    scoring_config: ScoringConfig = field(default_factory=ScoringConfig)
    section_scores: Mapping[str, int] = field(default_factory=dict)
    time_spent: int = 0
    quiz_name: Optional[str] = None
    subject_name: Optional[str] = None
    chapter_name: Optional[str] = None
    positive_marks: float = 0.0
    negative_marks: float = 0.0
    net_marks: float = 0.0
    id: Any = None

    def __post_init__(self):
        # Read-only view so that a stored record cannot be edited in place
        object.__setattr__(self, "section_scores", MappingProxyType(dict(self.section_scores or {})))

    @property
    def total_questions(self) -> int:
        return self.correct + self.wrong + self.unanswered

    @property
    def display_quiz_name(self) -> str:
        return self.quiz_name or UNKNOWN_QUIZ

    @property
    def display_subject_name(self) -> str:
        return self.subject_name or UNKNOWN_SUBJECT

    @property
    def display_chapter_name(self) -> str:
        return self.chapter_name or UNKNOWN_CHAPTER
