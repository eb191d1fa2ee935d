"""
Session identity generation.

Session tokens are the canonical string form of a random UUID4: 122 bits
drawn from the operating system's CSPRNG, so collisions are negligible and
no coordination between concurrent requests is needed.
"""

import uuid
from typing import Callable

SessionIdFactory = Callable[[], str]


def generate_session_id() -> str:
    """Return a fresh opaque session token."""
    return str(uuid.uuid4())
