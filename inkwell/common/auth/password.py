"""
Credential Utilities

Clients send an auth hash rather than a raw password. The server never stores
that value directly: it is stretched again with PBKDF2 and a per-user salt.
"""

import hashlib
import secrets
from typing import Optional, Tuple

PBKDF2_ITERATIONS = 100000


def hash_password(password: str, salt: Optional[str] = None) -> Tuple[str, str]:
    """
    Hash a credential using PBKDF2-HMAC-SHA256.

    Args:
        password: The credential to hash
        salt: Optional salt to use (if None, a new salt will be generated)

    Returns:
        A tuple of (hashed_password, salt)
    """
    if salt is None:
        salt = secrets.token_hex(16)

    key = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode(),
        salt.encode(),
        PBKDF2_ITERATIONS,
        dklen=32
    )

    return key.hex(), salt


def verify_password(password: str, hashed_password: str, salt: str) -> bool:
    """Check ``password`` against a stored hash in constant time."""
    calculated_hash, _ = hash_password(password, salt)
    return secrets.compare_digest(calculated_hash, hashed_password)
