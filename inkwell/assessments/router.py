"""
Assessment Router

HTTP endpoints for starting assessments, submitting answers and reading
sessions back. Handlers only translate between the wire models and the
AssessmentService; errors are mapped to status codes by the shared handlers.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api import get_db_session
from inkwell.assessments.repository import SQLAlchemyAssessmentRepository
from inkwell.assessments.schemas import (
    AnswerOut,
    AssessmentOut,
    AssessmentStarted,
    StartAssessmentRequest,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from inkwell.assessments.service import AssessmentService

router = APIRouter()


def get_assessment_service(session: AsyncSession = Depends(get_db_session)) -> AssessmentService:
    return AssessmentService(SQLAlchemyAssessmentRepository(session))


@router.post("/start", response_model=AssessmentStarted)
async def start_assessment(
    request: StartAssessmentRequest,
    service: AssessmentService = Depends(get_assessment_service)
) -> AssessmentStarted:
    """Start an assessment with the given questions."""
    assessment = await service.create_assessment(
        user_id=request.user_id,
        title=request.title,
        description=request.description,
        questions=[q.to_domain() for q in request.questions],
    )
    return AssessmentStarted.from_domain(assessment)


@router.post("/submit", response_model=SubmitAnswerResponse)
async def submit_answer(
    request: SubmitAnswerRequest,
    service: AssessmentService = Depends(get_assessment_service)
) -> SubmitAnswerResponse:
    """Grade and record an answer to one question of a session."""
    result = await service.submit_answer(
        session_id=request.session_id,
        question_id=request.question_id,
        answer_text=request.answer,
    )
    return SubmitAnswerResponse.from_domain(result)


@router.get("/{session_id}", response_model=AssessmentOut)
async def get_assessment(
    session_id: str,
    service: AssessmentService = Depends(get_assessment_service)
) -> AssessmentOut:
    """Get a whole assessment by its session token."""
    assessment = await service.get_assessment_by_session_id(session_id)
    return AssessmentOut.from_domain(assessment)


@router.get("/{session_id}/answers", response_model=List[AnswerOut])
async def list_answers(
    session_id: str,
    service: AssessmentService = Depends(get_assessment_service)
) -> List[AnswerOut]:
    """List the answers submitted to a session, oldest first."""
    answers = await service.list_answers(session_id)
    return [AnswerOut.from_domain(answer) for answer in answers]
