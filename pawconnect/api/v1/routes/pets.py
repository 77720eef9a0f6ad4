"""Module: pets."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from pawconnect.api.v1.routes.deps import get_recommendation_service, get_storage
from pawconnect.core.config import settings
from pawconnect.schemas import Pet, PetCreate, PetUpdate, RecommendationDocument
from pawconnect.services.recommendations import RecommendationService
from pawconnect.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


class PetCreatePayload(BaseModel):
    # Older clients send user_id only; either identifies the owner.
    owner_id: int | None = None
    user_id: int | None = None
    name: str = Field(min_length=1)
    breed: str = Field(min_length=1)
    age: int = Field(ge=0)
    gender: str = Field(min_length=1)
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


# -------------------------
# Endpoints
# -------------------------

@router.get("/public", response_model=list[Pet], summary="List public pets")
def list_public_pets(storage: Storage = Depends(get_storage)):
    return storage.get_public_pets()


@router.get("/user/{user_id}", response_model=list[Pet], summary="List pets owned by a user")
def list_user_pets(user_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_pets_by_user_id(user_id)


@router.post("", response_model=Pet, summary="Create pet for an owner user")
def create_pet(
    payload: PetCreatePayload,
    storage: Storage = Depends(get_storage),
    recommendations: RecommendationService = Depends(get_recommendation_service),
):
    owner_id = payload.owner_id if payload.owner_id is not None else payload.user_id
    if owner_id is None:
        raise HTTPException(status_code=400, detail="owner_id or user_id is required")

    if not storage.get_user(owner_id):
        raise HTTPException(status_code=404, detail="Owner not found")

    data = payload.model_dump(exclude={"owner_id", "user_id"})
    pet = storage.create_pet(PetCreate(owner_id=owner_id, user_id=owner_id, **data))
    logger.info("Created pet %s for user %s", pet.id, owner_id)

    if settings.generate_recommendations_on_create:
        pet = recommendations.enrich_new_pet(pet.id) or pet

    return pet


@router.get("/{pet_id}/recommendations", response_model=RecommendationDocument, summary="Care recommendations")
def get_pet_recommendations(
    pet_id: int,
    regenerate: bool = Query(default=False),
    recommendations: RecommendationService = Depends(get_recommendation_service),
):
    document = recommendations.get_or_generate(pet_id, regenerate=regenerate)
    if document is None:
        raise HTTPException(status_code=404, detail="Pet not found")
    return document


@router.get("/{pet_id}", response_model=Pet, summary="Get pet detail")
def get_pet(pet_id: int, storage: Storage = Depends(get_storage)):
    pet = storage.get_pet(pet_id)
    if not pet:
        raise HTTPException(status_code=404, detail="Pet not found")
    return pet


@router.put("/{pet_id}", response_model=Pet, summary="Update pet details")
def update_pet(pet_id: int, payload: PetUpdate, storage: Storage = Depends(get_storage)):
    pet = storage.update_pet(pet_id, payload.model_dump(exclude_unset=True))
    if not pet:
        raise HTTPException(status_code=404, detail="Pet not found")
    return pet
