"""
Assessment Repository Module

This module defines the repository interface the assessment service depends
on, plus its SQLAlchemy implementation. The SQLAlchemy implementation maps
between the ORM records and the frozen domain entities.
"""

import abc
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.common.db.repository import SQLAlchemyRecordStore
from inkwell.common.exceptions import DatabaseError
from inkwell.common.logger import app_logger
from inkwell.assessments.database_models import AnswerRecord, AssessmentRecord, QuestionRecord
from inkwell.assessments.model import Answer, Assessment, Feedback, Question

logger = app_logger.getChild("assessments.repository")


class AssessmentRepository(abc.ABC):
    """
    Storage contract for assessments and their answers.

    Each method is a single atomic store call.
    """

    @abc.abstractmethod
    async def create_assessment(self, assessment: Assessment) -> Assessment:
        """
        Persist an assessment together with its questions.

        Returns:
            The stored assessment, with its generated ``id``

        Raises:
            ConflictError: If the session token is already taken
            DatabaseError: On any other store failure
        """
        pass

    @abc.abstractmethod
    async def find_by_session_id(self, session_id: str) -> Assessment:
        """
        Get the assessment owning ``session_id`` (exact, case-sensitive match).

        Raises:
            NotFoundError: If no assessment owns the token
            DatabaseError: On store failure
        """
        pass

    @abc.abstractmethod
    async def create_answer(self, answer: Answer) -> Answer:
        """
        Append a graded answer.

        Raises:
            DatabaseError: On store failure
        """
        pass

    @abc.abstractmethod
    async def list_answers(self, assessment_id: int) -> List[Answer]:
        """Get the answers of an assessment in submission order."""
        pass


def question_to_domain(record: QuestionRecord) -> Question:
    return Question(
        question_id=record.question_id,
        text=record.text,
        correct_answer=record.correct_answer,
        metadata=dict(record.meta or {}),
        position=record.position,
    )


def assessment_to_domain(record: AssessmentRecord) -> Assessment:
    return Assessment(
        id=record.id,
        user_id=record.user_id,
        title=record.title,
        description=record.description,
        session_id=record.session_id,
        questions=tuple(question_to_domain(q) for q in record.questions),
        created_at=record.created_at,
    )


def answer_to_domain(record: AnswerRecord) -> Answer:
    return Answer(
        id=record.id,
        assessment_id=record.assessment_id,
        question_id=record.question_id,
        user_id=record.user_id,
        answer=record.answer,
        is_correct=record.is_correct,
        feedback=Feedback(record.feedback),
        created_at=record.created_at,
    )


class SQLAlchemyAssessmentRepository(AssessmentRepository):
    """
    Assessment repository backed by SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.assessments = SQLAlchemyRecordStore(session, AssessmentRecord, "Assessment")
        self.answers = SQLAlchemyRecordStore(session, AnswerRecord, "Answer")

    async def create_assessment(self, assessment: Assessment) -> Assessment:
        record = AssessmentRecord(
            user_id=assessment.user_id,
            title=assessment.title,
            description=assessment.description,
            session_id=assessment.session_id,
            created_at=assessment.created_at,
            questions=[
                QuestionRecord(
                    question_id=q.question_id,
                    position=q.position,
                    text=q.text,
                    correct_answer=q.correct_answer,
                    meta=dict(q.metadata),
                )
                for q in assessment.questions
            ],
        )
        stored = await self.assessments.create(record)
        return assessment_to_domain(stored)

    async def find_by_session_id(self, session_id: str) -> Assessment:
        record = await self.assessments.find_one(session_id=session_id)
        return assessment_to_domain(record)

    async def create_answer(self, answer: Answer) -> Answer:
        record = AnswerRecord(
            assessment_id=answer.assessment_id,
            question_id=answer.question_id,
            user_id=answer.user_id,
            answer=answer.answer,
            is_correct=answer.is_correct,
            feedback=answer.feedback.value,
            created_at=answer.created_at,
        )
        stored = await self.answers.create(record)
        return answer_to_domain(stored)

    async def list_answers(self, assessment_id: int) -> List[Answer]:
        statement = (
            select(AnswerRecord)
            .where(AnswerRecord.assessment_id == assessment_id)
            .order_by(AnswerRecord.id)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list answers for assessment {assessment_id}: {e}")
            raise DatabaseError("could not list answers", e) from e
        return [answer_to_domain(record) for record in result.scalars().all()]
