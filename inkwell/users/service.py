"""
User Service

Account registration, login and listing.
"""

from typing import List

from inkwell.common.auth.password import hash_password, verify_password
from inkwell.common.db.repository import RecordStore
from inkwell.common.exceptions import (
    AuthenticationError, ConflictError, DatabaseError, InternalError, NotFoundError
)
from inkwell.common.logger import app_logger
from inkwell.users.database_models import UserRecord
from inkwell.users.schemas import RegisterRequest

logger = app_logger.getChild("users.service")


class UserService:
    """
    Operations on user accounts.

    Args:
        users: Record store for UserRecord
    """

    def __init__(self, users: RecordStore[UserRecord]):
        self.users = users

    async def _exists(self, **criteria) -> bool:
        try:
            await self.users.find_one(**criteria)
        except NotFoundError:
            return False
        return True

    async def register(self, command: RegisterRequest) -> UserRecord:
        """
        Create an account.

        Raises:
            ConflictError: If the email or username is already registered
        """
        if await self._exists(email=command.email) or await self._exists(username=command.username):
            logger.info(f"Registration rejected for {command.email}: already registered")
            raise ConflictError("user already exists")

        hashed, salt = hash_password(command.authhash)
        user = UserRecord(
            email=command.email,
            username=command.username,
            full_name=command.full_name,
            hashed_authhash=hashed,
            salt=salt,
        )

        try:
            user = await self.users.create(user)
        except ConflictError as e:
            # Lost a race with a concurrent registration
            raise ConflictError("user already exists", e) from e

        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, email: str, authhash: str) -> UserRecord:
        """
        Check credentials and return the matching user.

        Raises:
            AuthenticationError: If the email is unknown or the credential is wrong
        """
        try:
            user = await self.users.find_one(email=email)
        except NotFoundError as e:
            logger.info("Login failed: unknown email")
            raise AuthenticationError() from e

        if not verify_password(authhash, user.hashed_authhash, user.salt):
            logger.info(f"Login failed for user {user.id}: wrong credential")
            raise AuthenticationError()

        return user

    async def list_users(self) -> List[UserRecord]:
        """
        Get every user, in ID order.

        Raises:
            InternalError: If the store could not be read
        """
        try:
            return await self.users.list()
        except DatabaseError as e:
            raise InternalError("could not list users", e) from e
