"""
Assessment subsystem.

Domain model, repositories, the assessment engine and its HTTP router.
"""

from inkwell.assessments.model import Answer, Assessment, Feedback, GradingResult, Question, grade
from inkwell.assessments.repository import AssessmentRepository, SQLAlchemyAssessmentRepository
from inkwell.assessments.memory_repository import MemoryAssessmentRepository
from inkwell.assessments.service import AssessmentService
from inkwell.assessments.session_ids import generate_session_id

__all__ = [
    'Answer',
    'Assessment',
    'Feedback',
    'GradingResult',
    'Question',
    'grade',
    'AssessmentRepository',
    'SQLAlchemyAssessmentRepository',
    'MemoryAssessmentRepository',
    'AssessmentService',
    'generate_session_id',
]
