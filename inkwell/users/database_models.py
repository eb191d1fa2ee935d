"""
SQLAlchemy ORM models for user accounts.
"""

import datetime

from sqlalchemy import Column, DateTime, Integer, String

from inkwell.database.base import Base


class UserRecord(Base):
    """A registered user and their credential material."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=False, unique=True)
    full_name = Column(String(255), nullable=True)
    hashed_authhash = Column(String(128), nullable=False)
    salt = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
