import logging
from typing import Dict

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel, Field

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.core.security import hash_password, is_password_hash, new_access_token, verify_password
from pawconnect.schemas import UserCreate, UserPublic
from pawconnect.storage import Storage, UniqueViolationError

logger = logging.getLogger(__name__)

router = APIRouter()

TOKENS: Dict[str, int] = {}
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    avatar: str | None = None
    bio: str | None = None
    location: str | None = None


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _get_token_value(authorization: str | None) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid Authorization header")

    return parts[1].strip()


@router.post("/register", response_model=UserPublic)
def register(payload: RegisterRequest, storage: Storage = Depends(get_storage)):
    email = _normalize_email(payload.email)

    if storage.get_user_by_email(email):
        raise HTTPException(status_code=409, detail="User with this email already exists")

    if payload.username and storage.get_user_by_username(payload.username):
        raise HTTPException(status_code=409, detail="Username already taken")

    data = payload.model_dump()
    data.update(email=email, password=hash_password(payload.password))
    try:
        user = storage.create_user(UserCreate(**data))
    except UniqueViolationError as exc:
        # Lost a race with a concurrent registration.
        raise HTTPException(status_code=409, detail=str(exc))

    logger.info("Registered user %s", user.id)
    return UserPublic.model_validate(user)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, storage: Storage = Depends(get_storage)):
    user = storage.get_user_by_email(_normalize_email(payload.email))

    if not user or not verify_password(payload.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    # Upgrade legacy plaintext credentials on first successful login.
    if not is_password_hash(user.password):
        storage.update_user(user.id, {"password": hash_password(payload.password)})

    token = new_access_token()
    TOKENS[token] = user.id

    return LoginResponse(access_token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=UserPublic)
def me(
    authorization: str | None = Header(default=None),
    storage: Storage = Depends(get_storage),
):
    token = _get_token_value(authorization)
    user_id = TOKENS.get(token)
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return UserPublic.model_validate(user)
