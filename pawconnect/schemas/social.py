"""Module: like, follow and comment schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LikeCreate(BaseModel):
    user_id: int
    post_id: int


class Like(LikeCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class FollowCreate(BaseModel):
    follower_id: int
    followed_pet_id: int


class Follow(FollowCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class CommentCreate(BaseModel):
    user_id: int
    post_id: int
    content: str = Field(min_length=1)


class Comment(CommentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
