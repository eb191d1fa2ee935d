"""
User Router

Registration and login under ``/auth`` and the user listing under ``/user``.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api import get_db_session
from inkwell.common.db.repository import SQLAlchemyRecordStore
from inkwell.users.database_models import UserRecord
from inkwell.users.schemas import LoginRequest, RegisterRequest, UserOut
from inkwell.users.service import UserService

auth_router = APIRouter()
users_router = APIRouter()


def get_user_service(session: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(SQLAlchemyRecordStore(session, UserRecord, "User"))


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: UserService = Depends(get_user_service)
):
    """Register a new user."""
    await service.register(request)
    return {"message": "User registered successfully"}


@auth_router.post("/login", response_model=UserOut)
async def login(
    request: LoginRequest,
    service: UserService = Depends(get_user_service)
):
    """Log in with an email and auth hash."""
    return await service.login(request.email, request.authhash)


@users_router.get("", response_model=List[UserOut])
async def list_users(service: UserService = Depends(get_user_service)):
    """List all users."""
    return await service.list_users()
