"""Module: match schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

SwipeDirection = Literal["left", "right"]


class MatchCreate(BaseModel):
    user_id: int
    pet_id_1: int
    pet_id_2: int
    swipe_direction: SwipeDirection
    is_match: bool = False


class Match(MatchCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime


# Swipe request: pet_id_1 is the swiper's pet, pet_id_2 the pet swiped on.
class SwipeRequest(BaseModel):
    user_id: int
    pet_id_1: int
    pet_id_2: int
    swipe_direction: SwipeDirection
