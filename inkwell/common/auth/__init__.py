"""Credential helpers."""

from inkwell.common.auth.password import hash_password, verify_password

__all__ = ['hash_password', 'verify_password']
