"""
Assessment Service

This module provides the assessment engine: starting a session with a frozen
set of questions, looking a session up by its token, and grading and
recording submitted answers.

The service keeps no state between calls. Everything lives in the
repository it is constructed with, so one instance per request is fine and
concurrent calls need no locking.
"""

import dataclasses
from typing import List, Optional, Sequence

from inkwell.common.exceptions import (
    ConflictError, DatabaseError, InternalError, NotFoundError, ValidationError
)
from inkwell.common.logger import LoggerAdapter, app_logger, log_execution_time
from inkwell.assessments.model import MAX_ID, Answer, Assessment, GradingResult, Question, grade
from inkwell.assessments.repository import AssessmentRepository
from inkwell.assessments.session_ids import SessionIdFactory, generate_session_id

logger = app_logger.getChild("assessments.service")


def prepare_questions(questions: Sequence[Question]) -> List[Question]:
    """
    Validate the questions of a new assessment and fill in what is missing.

    Questions without an identifier get the next integer after the largest
    supplied one, in list order. Positions follow list order.

    Raises:
        ValidationError: If the list is empty, a correct answer is empty, or a
            supplied identifier is out of range or repeated
    """
    if not questions:
        raise ValidationError("at least one question is required")

    supplied = [q.question_id for q in questions if q.question_id is not None]
    if any(question_id <= 0 or question_id > MAX_ID for question_id in supplied):
        raise ValidationError(f"question ids must be between 1 and {MAX_ID}")
    if len(set(supplied)) != len(supplied):
        raise ValidationError("question ids must be unique within an assessment")

    next_id = max(supplied, default=0) + 1
    prepared = []
    for position, question in enumerate(questions):
        if not question.correct_answer:
            raise ValidationError(f"question at position {position} has no correct answer")

        question_id = question.question_id
        if question_id is None:
            if next_id > MAX_ID:
                raise ValidationError(f"no question id left to assign at position {position}")
            question_id = next_id
            next_id += 1

        prepared.append(dataclasses.replace(question, question_id=question_id, position=position))
    return prepared


class AssessmentService:
    """
    Assessment engine.

    Args:
        repository: Where assessments and answers are stored
        session_id_factory: Source of session tokens; defaults to random UUIDs
    """

    def __init__(
        self,
        repository: AssessmentRepository,
        session_id_factory: Optional[SessionIdFactory] = None
    ):
        self.repository = repository
        self.session_id_factory = session_id_factory or generate_session_id

    @log_execution_time(logger)
    async def create_assessment(
        self,
        user_id: int,
        title: str,
        description: str,
        questions: Sequence[Question]
    ) -> Assessment:
        """
        Start a new assessment session.

        Returns:
            The stored assessment, including its ID and session token

        Raises:
            ValidationError: If the questions are unusable
            InternalError: If the assessment could not be stored
        """
        assessment = Assessment(
            id=None,
            user_id=user_id,
            title=title,
            description=description,
            session_id=self.session_id_factory(),
            questions=tuple(prepare_questions(questions)),
        )

        try:
            stored = await self.repository.create_assessment(assessment)
        except (ConflictError, DatabaseError) as e:
            logger.error(f"Could not create assessment for user {user_id}: {e}")
            raise InternalError("could not create assessment", e) from e

        LoggerAdapter(logger, {"session_id": stored.session_id}).info(
            f"Created assessment {stored.id} for user {user_id} with {len(stored.questions)} questions"
        )
        return stored

    async def get_assessment_by_session_id(self, session_id: str) -> Assessment:
        """
        Get the assessment owning ``session_id``.

        Raises:
            NotFoundError: If no assessment owns the token
        """
        try:
            return await self.repository.find_by_session_id(session_id)
        except NotFoundError as e:
            logger.warning(f"No assessment for session {session_id!r}")
            raise NotFoundError("Assessment", session_id) from e

    @log_execution_time(logger)
    async def submit_answer(
        self,
        session_id: str,
        question_id: Optional[int],
        answer_text: str
    ) -> GradingResult:
        """
        Grade an answer and record it.

        The result is only returned once the answer is stored. If storing
        fails the whole submission fails, even though grading succeeded.
        Repeated submissions are not deduplicated.

        Raises:
            NotFoundError: For an unknown session ("Session") or a question
                outside the session ("Question")
            InternalError: If the answer could not be stored
        """
        log = LoggerAdapter(logger, {"session_id": session_id})

        try:
            assessment = await self.get_assessment_by_session_id(session_id)
        except NotFoundError as e:
            raise NotFoundError("Session", session_id) from e

        question = assessment.find_question(question_id)
        if question is None:
            log.with_context(question_id=question_id).warning(
                f"Question is not part of assessment {assessment.id}"
            )
            raise NotFoundError("Question", question_id)

        result = grade(question, answer_text)
        answer = Answer(
            id=None,
            assessment_id=assessment.id,
            question_id=question.question_id,
            user_id=assessment.user_id,
            answer=answer_text,
            is_correct=result.is_correct,
            feedback=result.feedback,
        )

        try:
            stored = await self.repository.create_answer(answer)
        except (ConflictError, DatabaseError) as e:
            log.error(f"Could not save answer to question {question.question_id}: {e}")
            raise InternalError("could not save answer", e) from e

        log.info(f"Answer {stored.id} to question {question.question_id}: {result.feedback.value}")
        return result

    async def list_answers(self, session_id: str) -> List[Answer]:
        """
        Get every answer submitted to a session, oldest first.

        Raises:
            NotFoundError: For an unknown session ("Session")
        """
        try:
            assessment = await self.get_assessment_by_session_id(session_id)
        except NotFoundError as e:
            raise NotFoundError("Session", session_id) from e
        return await self.repository.list_answers(assessment.id)
