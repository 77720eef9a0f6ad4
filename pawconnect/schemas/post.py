"""Module: post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class PostCreate(BaseModel):
    pet_id: int
    user_id: int
    image_url: str
    caption: str | None = None
    location: str | None = None


class Post(PostCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    likes_count: int = 0
    comments_count: int = 0
    timestamp: datetime


class PostUpdate(BaseModel):
    image_url: str | None = None
    caption: str | None = None
    location: str | None = None

    @field_validator("image_url")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value
