from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.schemas import UserPublic, UserUpdate
from pawconnect.storage import Storage, UniqueViolationError

router = APIRouter()


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.model_validate(user)


@router.put("/{user_id}", response_model=UserPublic, summary="Edit profile")
def update_user(user_id: int, payload: UserUpdate, storage: Storage = Depends(get_storage)):
    updates = payload.model_dump(exclude_unset=True)

    if updates.get("username"):
        existing = storage.get_user_by_username(updates["username"])
        if existing and existing.id != user_id:
            raise HTTPException(status_code=409, detail="Username already taken")

    try:
        user = storage.update_user(user_id, updates)
    except UniqueViolationError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.model_validate(user)
