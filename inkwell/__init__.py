"""
Inkwell learning platform backend.

HTTP API for user accounts, stories and timed knowledge assessments.
"""

__version__ = "2.0.0"
