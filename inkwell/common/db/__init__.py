"""
Database Module

Engine and session management plus the generic record store.
"""

from inkwell.common.db.session import Database, get_engine_kwargs
from inkwell.common.db.repository import RecordStore, SQLAlchemyRecordStore

__all__ = [
    'Database',
    'get_engine_kwargs',
    'RecordStore',
    'SQLAlchemyRecordStore',
]
