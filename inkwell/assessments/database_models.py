"""
SQLAlchemy ORM models for assessments.

This module defines the tables behind the assessment subsystem:
- AssessmentRecord: one assessment session, addressed by its session token
- QuestionRecord: a question frozen inside an assessment
- AnswerRecord: one append-only graded submission
"""

import datetime

from sqlalchemy import (
    JSON, Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
)
from sqlalchemy.orm import relationship

from inkwell.database.base import Base


class AssessmentRecord(Base):
    """An assessment session and its frozen questions."""
    __tablename__ = 'assessments'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    session_id = Column(String(64), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    questions = relationship(
        "QuestionRecord",
        back_populates="assessment",
        order_by="QuestionRecord.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class QuestionRecord(Base):
    """A question belonging to exactly one assessment."""
    __tablename__ = 'assessment_questions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    assessment_id = Column(Integer, ForeignKey('assessments.id'), nullable=False)
    question_id = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    text = Column(Text, nullable=False, default="")
    correct_answer = Column(Text, nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    assessment = relationship("AssessmentRecord", back_populates="questions")

    __table_args__ = (
        Index('idx_assessment_questions_lookup', assessment_id, question_id),
    )


class AnswerRecord(Base):
    """A graded answer. Rows are inserted once and never updated."""
    __tablename__ = 'answers'

    id = Column(Integer, primary_key=True, autoincrement=True)
    assessment_id = Column(Integer, ForeignKey('assessments.id'), nullable=False, index=True)
    question_id = Column(Integer, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    answer = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False)
    feedback = Column(String(16), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
