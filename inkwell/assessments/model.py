"""
Assessment Domain Model Module

This module defines the domain entities of the assessment subsystem and the
grading rule. The entities are plain dataclasses, independent of how they
are stored.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

# Identifiers are stored in 32-bit integer columns
MAX_ID = 2**31 - 1


class Feedback(str, enum.Enum):
    """Feedback label returned with every graded answer."""
    CORRECT = "Correct"
    INCORRECT = "Incorrect"


@dataclass(frozen=True)
class Question:
    """
    A question frozen inside one assessment.

    Attributes:
        question_id: Identifier, unique within the owning assessment; None until assigned
        text: The prompt shown to the learner
        correct_answer: The exact text that counts as correct
        metadata: Free-form additional data about the question
        position: Canonical order within the assessment
    """
    question_id: Optional[int]
    text: str
    correct_answer: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    position: int = 0


@dataclass(frozen=True)
class Assessment:
    """
    One assessment session.

    Attributes:
        id: Store identifier; None until persisted
        user_id: Owning user
        title: Assessment title
        description: Assessment description
        session_id: Opaque token the client uses to address this session
        questions: Questions in canonical order
        created_at: When the session was started
    """
    id: Optional[int]
    user_id: int
    title: str
    description: str
    session_id: str
    questions: Tuple[Question, ...] = ()
    created_at: datetime = field(default_factory=datetime.utcnow)

    def find_question(self, question_id: Optional[int]) -> Optional[Question]:
        """
        Look up a question of this assessment by identifier.

        Unset, zero and negative identifiers never match. If several
        questions share the identifier, the first in canonical order wins.
        """
        if question_id is None or question_id <= 0:
            return None
        return next((q for q in self.questions if q.question_id == question_id), None)


@dataclass(frozen=True)
class Answer:
    """
    One graded submission. Answers are append-only.
    """
    id: Optional[int]
    assessment_id: int
    question_id: int
    user_id: int
    answer: str
    is_correct: bool
    feedback: Feedback
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class GradingResult:
    """Outcome of grading one answer."""
    is_correct: bool
    feedback: Feedback

    @classmethod
    def for_correctness(cls, is_correct: bool) -> 'GradingResult':
        return cls(is_correct=is_correct, feedback=Feedback.CORRECT if is_correct else Feedback.INCORRECT)


def grade(question: Question, answer_text: str) -> GradingResult:
    """
    Grade ``answer_text`` against a question.

    The comparison is exact string equality: no trimming, no case folding,
    no partial credit.
    """
    return GradingResult.for_correctness(answer_text == question.correct_answer)
