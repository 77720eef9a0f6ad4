"""Module: matches."""

from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_notifier, get_storage
from pawconnect.schemas import Match, Pet, SwipeRequest
from pawconnect.services.matching import record_swipe
from pawconnect.services.notifications import NotificationHub
from pawconnect.storage import Storage, UniqueViolationError

router = APIRouter()


class MatchWithPets(Match):
    pet1: Pet | None = None
    pet2: Pet | None = None


@router.get("/potential/{user_id}", response_model=list[Pet], summary="Pets the user can still swipe on")
def list_potential_matches(user_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_potential_matches(user_id)


@router.post("", response_model=Match, summary="Record a swipe")
def swipe(
    payload: SwipeRequest,
    storage: Storage = Depends(get_storage),
    notifier: NotificationHub = Depends(get_notifier),
):
    if payload.pet_id_1 == payload.pet_id_2:
        raise HTTPException(status_code=400, detail="Cannot match a pet with itself")

    own_pet = storage.get_pet(payload.pet_id_1)
    if not own_pet:
        raise HTTPException(status_code=404, detail="Pet not found")
    if own_pet.owner_id != payload.user_id:
        raise HTTPException(status_code=400, detail="Swipe with a pet you own")

    target = storage.get_pet(payload.pet_id_2)
    if not target:
        raise HTTPException(status_code=404, detail="Pet not found")
    if target.owner_id == payload.user_id:
        raise HTTPException(status_code=400, detail="Cannot swipe on your own pet")

    try:
        return record_swipe(storage, payload, notifier)
    except UniqueViolationError:
        raise HTTPException(status_code=409, detail="Already swiped on this pet")


@router.get("/user/{user_id}", response_model=list[MatchWithPets], summary="Mutual matches of a user")
def list_user_matches(user_id: int, storage: Storage = Depends(get_storage)):
    out = []
    for match in storage.get_matches_by_user_id(user_id):
        if not match.is_match:
            continue
        out.append(
            MatchWithPets(
                **match.model_dump(),
                pet1=storage.get_pet(match.pet_id_1),
                pet2=storage.get_pet(match.pet_id_2),
            )
        )
    return out
