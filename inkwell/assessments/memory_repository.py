"""
Memory Assessment Repository Module

This module provides an in-memory implementation of the AssessmentRepository
interface for development and testing purposes.
"""

import dataclasses
import itertools
from typing import Dict, List

from inkwell.common.exceptions import ConflictError, NotFoundError
from inkwell.assessments.model import Answer, Assessment
from inkwell.assessments.repository import AssessmentRepository


class MemoryAssessmentRepository(AssessmentRepository):
    """
    In-memory implementation of the AssessmentRepository.

    Records live in dictionaries for the lifetime of the instance. IDs come
    from monotonically increasing counters, starting at 1.
    """

    def __init__(self):
        self._assessments: Dict[str, Assessment] = {}
        self._answers: Dict[int, Answer] = {}
        self._assessment_ids = itertools.count(1)
        self._answer_ids = itertools.count(1)

    async def create_assessment(self, assessment: Assessment) -> Assessment:
        if assessment.session_id in self._assessments:
            raise ConflictError("Assessment already exists")
        stored = dataclasses.replace(assessment, id=next(self._assessment_ids))
        self._assessments[stored.session_id] = stored
        return stored

    async def find_by_session_id(self, session_id: str) -> Assessment:
        assessment = self._assessments.get(session_id)
        if assessment is None:
            raise NotFoundError("Assessment", session_id)
        return assessment

    async def create_answer(self, answer: Answer) -> Answer:
        stored = dataclasses.replace(answer, id=next(self._answer_ids))
        self._answers[stored.id] = stored
        return stored

    async def list_answers(self, assessment_id: int) -> List[Answer]:
        return [
            answer for answer in self._answers.values()
            if answer.assessment_id == assessment_id
        ]

    def get_all(self) -> List[Assessment]:
        """
        Get all assessments.

        This method is specific to the memory implementation and not part of
        the AssessmentRepository interface.
        """
        return list(self._assessments.values())
