"""
Storage interface shared by the in-memory and the relational backends.

Both implementations must be observably identical for the same sequence of
calls: same ids, same defaults, same ordering, same error types. Lookups that
find nothing return ``None`` (or an empty list); they never raise. Duplicate
unique keys raise :class:`UniqueViolationError`. Foreign keys are stored as
given and never checked here; the API layer validates existence.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from pawconnect.schemas import (
    Comment,
    CommentCreate,
    Follow,
    FollowCreate,
    Like,
    LikeCreate,
    Match,
    MatchCreate,
    MedicalRecord,
    MedicalRecordCreate,
    Pet,
    PetCreate,
    Post,
    PostCreate,
    User,
    UserCreate,
)


class StorageError(Exception):
    """Base class for failures reported by a storage backend."""


class UniqueViolationError(StorageError):
    def __init__(self, entity: str, fields: tuple[str, ...]):
        self.entity = entity
        self.fields = fields
        super().__init__(f"{entity} with the same {', '.join(fields)} already exists")


def match_key(pet_id_1: int, pet_id_2: int) -> tuple[int, int]:
    """Order-independent key for a pair of pets."""
    return (min(pet_id_1, pet_id_2), max(pet_id_1, pet_id_2))


def updatable_fields(
    record_type: type, updates: Mapping[str, Any], immutable: frozenset[str] = frozenset()
) -> dict[str, Any]:
    # Partial updates only touch known columns; the id is immutable.
    return {
        key: value
        for key, value in updates.items()
        if key in record_type.model_fields and key != "id" and key not in immutable
    }


# A swipe keeps its owner and pet pair for life.
MATCH_KEY_FIELDS = frozenset({"user_id", "pet_id_1", "pet_id_2"})


class Storage(ABC):
    # User operations
    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> User: ...

    @abstractmethod
    def update_user(self, user_id: int, updates: Mapping[str, Any]) -> User | None: ...

    # Pet operations
    @abstractmethod
    def get_pet(self, pet_id: int) -> Pet | None: ...

    @abstractmethod
    def get_pets_by_user_id(self, user_id: int) -> list[Pet]: ...

    @abstractmethod
    def create_pet(self, data: PetCreate) -> Pet: ...

    @abstractmethod
    def update_pet(self, pet_id: int, updates: Mapping[str, Any]) -> Pet | None: ...

    @abstractmethod
    def get_public_pets(self) -> list[Pet]: ...

    # Post operations
    @abstractmethod
    def get_post(self, post_id: int) -> Post | None: ...

    @abstractmethod
    def get_posts_by_pet_id(self, pet_id: int) -> list[Post]: ...

    @abstractmethod
    def get_posts_for_feed(self, user_id: int) -> list[Post]:
        """Posts of the user's own and followed pets, newest first."""

    @abstractmethod
    def create_post(self, data: PostCreate) -> Post: ...

    @abstractmethod
    def update_post(self, post_id: int, updates: Mapping[str, Any]) -> Post | None: ...

    # Medical record operations
    @abstractmethod
    def get_medical_record(self, record_id: int) -> MedicalRecord | None: ...

    @abstractmethod
    def get_medical_records_by_pet_id(self, pet_id: int) -> list[MedicalRecord]: ...

    @abstractmethod
    def create_medical_record(self, data: MedicalRecordCreate) -> MedicalRecord: ...

    @abstractmethod
    def update_medical_record(self, record_id: int, updates: Mapping[str, Any]) -> MedicalRecord | None: ...

    # Like operations
    @abstractmethod
    def get_like(self, user_id: int, post_id: int) -> Like | None: ...

    @abstractmethod
    def create_like(self, data: LikeCreate) -> Like:
        """Insert the like and increment the post's likes_count."""

    @abstractmethod
    def delete_like(self, user_id: int, post_id: int) -> bool:
        """Remove the like and decrement likes_count; False if there was none."""

    @abstractmethod
    def get_likes_by_post_id(self, post_id: int) -> list[Like]: ...

    # Follow operations
    @abstractmethod
    def get_follow(self, follower_id: int, followed_pet_id: int) -> Follow | None: ...

    @abstractmethod
    def create_follow(self, data: FollowCreate) -> Follow: ...

    @abstractmethod
    def delete_follow(self, follower_id: int, followed_pet_id: int) -> bool: ...

    @abstractmethod
    def get_follows_by_user_id(self, user_id: int) -> list[Follow]: ...

    # Comment operations
    @abstractmethod
    def get_comment(self, comment_id: int) -> Comment | None: ...

    @abstractmethod
    def get_comments_by_post_id(self, post_id: int) -> list[Comment]: ...

    @abstractmethod
    def create_comment(self, data: CommentCreate) -> Comment:
        """Insert the comment and increment the post's comments_count."""

    @abstractmethod
    def delete_comment(self, comment_id: int) -> bool: ...

    # Match operations
    @abstractmethod
    def get_match(self, user_id: int, pet_id_1: int, pet_id_2: int) -> Match | None:
        """The user's swipe on the pair, whichever order the pets are given in."""

    @abstractmethod
    def get_matches_by_user_id(self, user_id: int) -> list[Match]: ...

    @abstractmethod
    def get_matches_for_pair(self, pet_id_1: int, pet_id_2: int) -> list[Match]: ...

    @abstractmethod
    def create_match(self, data: MatchCreate) -> Match: ...

    @abstractmethod
    def update_match(self, match_id: int, updates: Mapping[str, Any]) -> Match | None: ...

    @abstractmethod
    def get_potential_matches(self, user_id: int) -> list[Pet]:
        """
        Public pets the user can still swipe on: not owned by the user and not
        already part of a match row involving any of the user's pets.
        """
