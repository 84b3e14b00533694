"""Pydantic schemas for event memories and their comments."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class MemoryCreate(BaseModel):
    user_id: str
    image_url: str = Field(min_length=1)
    caption: str = ""


class MemoryOut(BaseModel):
    id: str
    event_id: str
    user_id: str
    user_name: str
    user_avatar: Optional[str] = None
    image_url: str
    caption: str
    likes_count: int
    comments_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    user_id: str
    content: str = Field(min_length=1)


class CommentOut(BaseModel):
    id: str
    memory_id: str
    user_id: str
    user_name: str
    user_avatar: Optional[str] = None
    content: str
    likes_count: int
    created_at: datetime

    model_config = {"from_attributes": True}
