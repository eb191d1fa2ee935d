"""
Request and response models for the assessment endpoints.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from inkwell.assessments.model import MAX_ID, Answer, Assessment, GradingResult, Question


class QuestionIn(BaseModel):
    """A question as submitted when starting an assessment."""
    id: Optional[int] = Field(None, ge=1, le=MAX_ID, description="Identifier within the assessment; assigned if omitted")
    question: str = Field("", description="Prompt text")
    correct_answer: str = Field(..., min_length=1, description="Exact text that counts as correct")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_domain(self) -> Question:
        return Question(
            question_id=self.id,
            text=self.question,
            correct_answer=self.correct_answer,
            metadata=dict(self.metadata),
        )


class StartAssessmentRequest(BaseModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    title: str = ""
    description: str = ""
    questions: List[QuestionIn] = Field(..., min_length=1)

    @field_validator('questions')
    @classmethod
    def validate_unique_ids(cls, questions: List[QuestionIn]) -> List[QuestionIn]:
        ids = [q.id for q in questions if q.id is not None]
        if len(set(ids)) != len(ids):
            raise ValueError("question ids must be unique within an assessment")
        return questions


class SubmitAnswerRequest(BaseModel):
    session_id: str = Field(..., min_length=1)
    question_id: int
    answer: str


class QuestionOut(BaseModel):
    id: int
    question: str
    correct_answer: str
    metadata: Dict[str, Any]

    @classmethod
    def from_domain(cls, question: Question) -> 'QuestionOut':
        return cls(
            id=question.question_id,
            question=question.text,
            correct_answer=question.correct_answer,
            metadata=question.metadata,
        )


class AssessmentStarted(BaseModel):
    session_id: str
    questions: List[QuestionOut]

    @classmethod
    def from_domain(cls, assessment: Assessment) -> 'AssessmentStarted':
        return cls(
            session_id=assessment.session_id,
            questions=[QuestionOut.from_domain(q) for q in assessment.questions],
        )


class AssessmentOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    session_id: str
    questions: List[QuestionOut]
    created_at: datetime

    @classmethod
    def from_domain(cls, assessment: Assessment) -> 'AssessmentOut':
        return cls(
            id=assessment.id,
            user_id=assessment.user_id,
            title=assessment.title,
            description=assessment.description,
            session_id=assessment.session_id,
            questions=[QuestionOut.from_domain(q) for q in assessment.questions],
            created_at=assessment.created_at,
        )


class SubmitAnswerResponse(BaseModel):
    is_correct: bool
    feedback: str

    @classmethod
    def from_domain(cls, result: GradingResult) -> 'SubmitAnswerResponse':
        return cls(is_correct=result.is_correct, feedback=result.feedback.value)


class AnswerOut(BaseModel):
    id: int
    assessment_id: int
    question_id: int
    user_id: int
    answer: str
    is_correct: bool
    feedback: str
    created_at: datetime

    @classmethod
    def from_domain(cls, answer: Answer) -> 'AnswerOut':
        return cls(
            id=answer.id,
            assessment_id=answer.assessment_id,
            question_id=answer.question_id,
            user_id=answer.user_id,
            answer=answer.answer,
            is_correct=answer.is_correct,
            feedback=answer.feedback.value,
            created_at=answer.created_at,
        )
