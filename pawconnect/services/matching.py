"""Swipe recording and mutual-match promotion."""

import logging

from pawconnect.schemas import Match, MatchCreate, SwipeRequest
from pawconnect.services.notifications import NotificationHub
from pawconnect.storage import Storage

logger = logging.getLogger(__name__)


def record_swipe(storage: Storage, swipe: SwipeRequest, notifier: NotificationHub | None = None) -> Match:
    """
    Store the swiper's row for the pet pair. A right swipe that meets another
    user's right swipe on the same pair promotes both rows to is_match.

    Raises UniqueViolationError when the user already swiped on this pair.
    """
    match = storage.create_match(MatchCreate(**swipe.model_dump(), is_match=False))
    if swipe.swipe_direction != "right":
        return match

    for other in storage.get_matches_for_pair(swipe.pet_id_1, swipe.pet_id_2):
        if other.user_id == swipe.user_id or other.swipe_direction != "right":
            continue

        storage.update_match(other.id, {"is_match": True})
        match = storage.update_match(match.id, {"is_match": True})
        logger.info(
            "Mutual match between pets %s and %s (users %s, %s)",
            match.pet_id_1, match.pet_id_2, swipe.user_id, other.user_id,
        )

        if notifier is not None:
            pet_ids = [match.pet_id_1, match.pet_id_2]
            notifier.notify_user(other.user_id, swipe.user_id, "match", match_id=other.id, pet_ids=pet_ids)
            notifier.notify_user(swipe.user_id, other.user_id, "match", match_id=match.id, pet_ids=pet_ids)

    return match
