"""Module: user schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    name: str
    email: str
    password: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = "client"
    phone: str | None = None
    department: str | None = None
    specialization: str | None = None
    avatar: str | None = None
    bio: str | None = None
    location: str | None = None
    is_active: bool = True


class User(UserCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


# Profile edit: every field optional, only the ones sent are applied.
class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None
    bio: str | None = None
    location: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


# What the API returns for a user: never the stored credential.
class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    phone: str | None = None
    avatar: str | None = None
    bio: str | None = None
    location: str | None = None
    is_active: bool | None = None
