"""Module: pet schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PetCreate(BaseModel):
    owner_id: int
    # Older clients read user_id; it always mirrors owner_id unless given.
    user_id: int | None = None
    name: str
    breed: str
    age: int
    gender: str
    species: str | None = None
    weight: str | None = None
    color: str | None = None
    bio: str | None = None
    is_public: bool = True
    profile_image: str | None = None
    avatar: str | None = None
    photos: list[str] = Field(default_factory=list)
    microchip_id: str | None = None
    next_vaccination: datetime | None = None
    last_checkup: datetime | None = None
    last_visit: datetime | None = None
    health_tips: list[str] = Field(default_factory=list)
    diet_recommendations: str | None = None
    ai_recommendations: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _default_user_id(self):
        if self.user_id is None:
            self.user_id = self.owner_id
        return self


class Pet(PetCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class PetUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    species: str | None = None
    breed: str | None = None
    age: int | None = Field(default=None, ge=0)
    gender: str | None = None
    weight: str | None = None
    color: str | None = None
    bio: str | None = None
    is_public: bool | None = None
    profile_image: str | None = None
    avatar: str | None = None
    photos: list[str] | None = None
    microchip_id: str | None = None
    next_vaccination: datetime | None = None
    last_checkup: datetime | None = None
    last_visit: datetime | None = None
    health_tips: list[str] | None = None
    diet_recommendations: str | None = None

    # Omitting a field leaves it unchanged; null is not a value for these columns.
    @field_validator("name", "breed", "age", "gender")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value
