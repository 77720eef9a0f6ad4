from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_notifier, get_storage
from pawconnect.schemas import Follow, FollowCreate
from pawconnect.services.notifications import NotificationHub
from pawconnect.storage import Storage

router = APIRouter()


@router.post("", response_model=Follow)
def follow_pet(
    payload: FollowCreate,
    storage: Storage = Depends(get_storage),
    notifier: NotificationHub = Depends(get_notifier),
):
    pet = storage.get_pet(payload.followed_pet_id)
    if not pet:
        raise HTTPException(status_code=404, detail="Pet not found")

    if storage.get_follow(payload.follower_id, payload.followed_pet_id):
        raise HTTPException(status_code=409, detail="Already following this pet")

    follow = storage.create_follow(payload)
    notifier.notify_user(pet.owner_id, payload.follower_id, "follow", pet_id=pet.id)
    return follow


@router.delete("/{follower_id}/{followed_pet_id}")
def unfollow_pet(follower_id: int, followed_pet_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_follow(follower_id, followed_pet_id):
        raise HTTPException(status_code=404, detail="Follow relationship not found")
    return {"message": "Unfollowed successfully"}


@router.get("/user/{user_id}", response_model=list[Follow])
def list_user_follows(user_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_follows_by_user_id(user_id)
