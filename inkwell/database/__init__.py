"""
Database Module

Declarative base shared by every ORM model in Inkwell.
"""

from inkwell.database.base import Base, metadata

__all__ = ['Base', 'metadata']
