"""
Story Router
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.api import get_db_session
from inkwell.common.db.repository import SQLAlchemyRecordStore
from inkwell.stories.database_models import StoryRecord
from inkwell.stories.schemas import StoryOut
from inkwell.stories.service import StoryService

router = APIRouter()


def get_story_service(session: AsyncSession = Depends(get_db_session)) -> StoryService:
    return StoryService(SQLAlchemyRecordStore(session, StoryRecord, "Story"))


@router.get("", response_model=List[StoryOut])
async def list_stories(service: StoryService = Depends(get_story_service)):
    """List all stories."""
    return await service.list_stories()
