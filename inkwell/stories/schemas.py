"""
Response models for the story endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    summary: str
    content: str
    created_at: datetime
