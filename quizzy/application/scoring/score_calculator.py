from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ...domain.entities import (
    Answered,
    Question,
    QuizMeta,
    ResultRecord,
    ScoringConfig,
    SubmittedAnswer,
)
from ...domain.errors import InvalidConfig, MalformedInput
from ...utils.helpers import percent_half_up, round_half_up, utc_now

logger = logging.getLogger(__name__)


# ---------------------------
# Tallies
# ---------------------------

@dataclass
class Tally:
    correct: int = 0
    wrong: int = 0
    unanswered: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.wrong + self.unanswered

    def add(self, outcome: str) -> None:
        setattr(self, outcome, getattr(self, outcome) + 1)


@dataclass(frozen=True)
class Marks:
    positive: float
    negative: float
    net: int
    percentage: int


def classify(question: Question, answer: Optional[SubmittedAnswer]) -> str:
    if answer is None or not isinstance(answer.selection, Answered):
        return "unanswered"
    if answer.selection.index == question.correct_index:
        return "correct"
    return "wrong"


def compute_marks(tally: Tally, config: ScoringConfig) -> Marks:
    """
    One mark per correct answer, minus the penalty per wrong answer.

    The net is floored at zero and rounded half-up to whole marks before the
    percentage is taken, so 5.25 net marks out of 10 is 50%.
    """
    positive = float(tally.correct)
    negative = tally.wrong * config.penalty
    net = round_half_up(max(0.0, positive - negative))
    percentage = percent_half_up(net, tally.total)
    return Marks(positive=positive, negative=negative, net=net, percentage=min(100, percentage))


# ---------------------------
# Calculator
# ---------------------------

class ScoreCalculator:
    """
    Scores one quiz attempt into a ResultRecord.
    Pure apart from the clock used to stamp the submission.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def score(
        self,
        answers: Iterable[SubmittedAnswer],
        questions: Sequence[Question],
        config: ScoringConfig,
        *,
        user_id,
        quiz: QuizMeta,
        time_spent: int = 0,
    ) -> ResultRecord:
        if config.negative_mark_value < 0:
            raise InvalidConfig(
                f"Negative mark value must be non-negative, got {config.negative_mark_value}"
            )

        by_question = self._index_answers(answers, questions)

        overall = Tally()
        sections: Dict[str, Tally] = {}
        for question in questions:
            outcome = classify(question, by_question.get(question.id))
            overall.add(outcome)
            sections.setdefault(question.section, Tally()).add(outcome)

        marks = compute_marks(overall, config)
        section_scores = {
            name: compute_marks(tally, config).percentage
            for name, tally in sections.items()
            if tally.total > 0
        }

        logger.debug(
            f"Scored quiz {quiz.id} for user {user_id}: correct={overall.correct}, "
            f"wrong={overall.wrong}, unanswered={overall.unanswered}, score={marks.percentage}"
        )

        return ResultRecord(
            user_id=user_id,
            quiz_id=quiz.id,
            quiz_name=quiz.title,
            subject_name=quiz.subject_name,
            chapter_name=quiz.chapter_name,
            submitted_at=self._clock(),
            total_score=marks.percentage,
            section_scores=section_scores,
            correct=overall.correct,
            wrong=overall.wrong,
            unanswered=overall.unanswered,
            time_spent=max(0, int(time_spent or 0)),
            scoring_config=config,
            positive_marks=marks.positive,
            negative_marks=marks.negative,
            net_marks=marks.net,
        )

    @staticmethod
    def _index_answers(
        answers: Iterable[SubmittedAnswer], questions: Sequence[Question]
    ) -> Dict[object, SubmittedAnswer]:
        known = {q.id for q in questions}
        indexed: Dict[object, SubmittedAnswer] = {}
        unknown: List[object] = []
        for answer in answers:
            if answer.question_id not in known:
                unknown.append(answer.question_id)
                continue
            # last answer for a question wins
            indexed[answer.question_id] = answer
        if unknown:
            raise MalformedInput(f"Answers reference unknown questions: {unknown}")
        return indexed
