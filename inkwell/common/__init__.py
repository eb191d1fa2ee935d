"""Shared infrastructure: logging, errors, persistence and credentials."""
