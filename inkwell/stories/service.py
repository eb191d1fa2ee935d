"""
Story Service
"""

from typing import List

from inkwell.common.db.repository import RecordStore
from inkwell.common.exceptions import DatabaseError, InternalError
from inkwell.stories.database_models import StoryRecord


class StoryService:
    """Read access to stories."""

    def __init__(self, stories: RecordStore[StoryRecord]):
        self.stories = stories

    async def list_stories(self) -> List[StoryRecord]:
        """
        Get every story, in ID order.

        Raises:
            InternalError: If the store could not be read
        """
        try:
            return await self.stories.list()
        except DatabaseError as e:
            raise InternalError("could not list stories", e) from e
