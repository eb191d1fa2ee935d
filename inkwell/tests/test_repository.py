"""
Tests for the SQLAlchemy assessment repository, against a SQLite file.
"""

import pytest

from inkwell.assessments.model import Answer, Assessment, Feedback, Question
from inkwell.assessments.repository import SQLAlchemyAssessmentRepository
from inkwell.common.db.session import Database
from inkwell.common.exceptions import ConflictError, NotFoundError


async def open_database(tmp_path) -> Database:
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'repository.db'}")
    await database.create_schema()
    return database


def make_assessment(session_id="token-1"):
    return Assessment(
        id=None,
        user_id=3,
        title="Poetry",
        description="Meter and rhyme",
        session_id=session_id,
        questions=(
            Question(2, "Meter of a sonnet?", "iambic pentameter", {"topic": "meter"}, position=0),
            Question(1, "Lines in a sonnet?", "14", position=1),
        ),
    )


def make_answer(assessment, question_id, text, is_correct):
    return Answer(
        id=None,
        assessment_id=assessment.id,
        question_id=question_id,
        user_id=assessment.user_id,
        answer=text,
        is_correct=is_correct,
        feedback=Feedback.CORRECT if is_correct else Feedback.INCORRECT,
    )


@pytest.mark.asyncio
async def test_assessment_roundtrip(tmp_path):
    database = await open_database(tmp_path)
    try:
        async with database.session() as session:
            stored = await SQLAlchemyAssessmentRepository(session).create_assessment(make_assessment())
        assert stored.id is not None

        async with database.session() as session:
            loaded = await SQLAlchemyAssessmentRepository(session).find_by_session_id("token-1")

        assert loaded.id == stored.id
        assert loaded.user_id == 3
        assert loaded.title == "Poetry"
        assert loaded.description == "Meter and rhyme"
        assert [q.question_id for q in loaded.questions] == [2, 1]
        assert loaded.questions[0].metadata == {"topic": "meter"}
        assert loaded.questions[1].metadata == {}
        assert loaded.find_question(1).correct_answer == "14"
    finally:
        await database.dispose()


@pytest.mark.asyncio
async def test_duplicate_session_token(tmp_path):
    database = await open_database(tmp_path)
    try:
        async with database.session() as session:
            repository = SQLAlchemyAssessmentRepository(session)
            await repository.create_assessment(make_assessment())
            with pytest.raises(ConflictError):
                await repository.create_assessment(make_assessment())
    finally:
        await database.dispose()


@pytest.mark.asyncio
async def test_unknown_session_token(tmp_path):
    database = await open_database(tmp_path)
    try:
        async with database.session() as session:
            repository = SQLAlchemyAssessmentRepository(session)
            await repository.create_assessment(make_assessment())
            with pytest.raises(NotFoundError) as exc_info:
                await repository.find_by_session_id("TOKEN-1")
        assert exc_info.value.resource_type == "Assessment"
    finally:
        await database.dispose()


@pytest.mark.asyncio
async def test_answers_listed_in_submission_order(tmp_path):
    database = await open_database(tmp_path)
    try:
        async with database.session() as session:
            repository = SQLAlchemyAssessmentRepository(session)
            first = await repository.create_assessment(make_assessment("a"))
            second = await repository.create_assessment(make_assessment("b"))

            await repository.create_answer(make_answer(first, 1, "14", True))
            await repository.create_answer(make_answer(second, 1, "12", False))
            await repository.create_answer(make_answer(first, 2, "trochaic", False))
            await repository.create_answer(make_answer(first, 1, "14", True))

        async with database.session() as session:
            answers = await SQLAlchemyAssessmentRepository(session).list_answers(first.id)

        assert [(a.question_id, a.answer, a.feedback) for a in answers] == [
            (1, "14", Feedback.CORRECT),
            (2, "trochaic", Feedback.INCORRECT),
            (1, "14", Feedback.CORRECT),
        ]
        assert answers[0].id < answers[1].id < answers[2].id
        assert all(a.user_id == 3 for a in answers)
    finally:
        await database.dispose()
