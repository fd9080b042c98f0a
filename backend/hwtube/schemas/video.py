"""Pydantic schemas for Video metadata."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class VideoCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    filename: str = Field(min_length=1, max_length=512)


class VideoOut(BaseModel):
    video_id: str
    uploader_id: str
    title: str
    description: Optional[str] = None
    filename: str
    created_at: datetime

    model_config = {"from_attributes": True}
