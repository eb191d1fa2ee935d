"""
SQLAlchemy ORM models for stories.
"""

import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from inkwell.database.base import Base


class StoryRecord(Base):
    """A story served to learners."""
    __tablename__ = 'stories'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False, default="")
    summary = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
