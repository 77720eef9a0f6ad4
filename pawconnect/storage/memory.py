"""In-memory storage backend used for development, demos and tests."""

import itertools
import threading
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from pawconnect.db.base import utcnow
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
from pawconnect.storage.base import (
    MATCH_KEY_FIELDS,
    Storage,
    StorageError,
    UniqueViolationError,
    match_key,
    updatable_fields,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _copy(record: RecordT | None) -> RecordT | None:
    return record.model_copy(deep=True) if record is not None else None


def _merge(record: RecordT, updates: Mapping[str, Any], entity: str,
           immutable: frozenset[str] = frozenset()) -> RecordT:
    # Rebuilt through validation so a stored record is always a valid one.
    record_type = type(record)
    changes = updatable_fields(record_type, updates, immutable)
    try:
        return record_type.model_validate({**record.model_dump(), **changes})
    except ValidationError as exc:
        raise StorageError(f"invalid {entity} update: {exc.error_count()} field error(s)") from exc


class MemStorage(Storage):
    """
    Maps keyed by id, plus composite keys for the join entities:
    likes by (user_id, post_id), follows by (follower_id, followed_pet_id)
    and matches by (user_id, lower pet id, higher pet id).

    Every read and write holds the same re-entrant lock, so scans never see a
    map being resized by another request thread. Records handed out are deep
    copies, so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()

        self.users: dict[int, User] = {}
        self.pets: dict[int, Pet] = {}
        self.posts: dict[int, Post] = {}
        self.medical_records: dict[int, MedicalRecord] = {}
        self.likes: dict[tuple[int, int], Like] = {}
        self.follows: dict[tuple[int, int], Follow] = {}
        self.comments: dict[int, Comment] = {}
        self.matches: dict[tuple[int, int, int], Match] = {}

        self._ids = {
            name: itertools.count(1)
            for name in ("user", "pet", "post", "medical_record", "like", "follow", "comment", "match")
        }

    def _next_id(self, name: str) -> int:
        return next(self._ids[name])

    # -------------------------
    # Users
    # -------------------------
    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return _copy(self.users.get(user_id))

    def get_user_by_email(self, email: str) -> User | None:
        with self._lock:
            return _copy(next((u for u in self.users.values() if u.email == email), None))

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            return _copy(next((u for u in self.users.values() if u.username == username), None))

    def _check_user_unique(self, email: str, username: str | None, exclude_id: int | None = None) -> None:
        for user in self.users.values():
            if user.id == exclude_id:
                continue
            if user.email == email:
                raise UniqueViolationError("user", ("email",))
            if username is not None and user.username == username:
                raise UniqueViolationError("user", ("username",))

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            self._check_user_unique(data.email, data.username)
            user = User(id=self._next_id("user"), **data.model_dump())
            self.users[user.id] = user
            return _copy(user)

    def update_user(self, user_id: int, updates: Mapping[str, Any]) -> User | None:
        with self._lock:
            user = self.users.get(user_id)
            if user is None:
                return None
            updated = _merge(user, updates, "user")
            self._check_user_unique(updated.email, updated.username, exclude_id=user_id)
            self.users[user_id] = updated
            return _copy(updated)

    # -------------------------
    # Pets
    # -------------------------
    def get_pet(self, pet_id: int) -> Pet | None:
        with self._lock:
            return _copy(self.pets.get(pet_id))

    def get_pets_by_user_id(self, user_id: int) -> list[Pet]:
        with self._lock:
            return [_copy(p) for p in self.pets.values() if p.owner_id == user_id]

    def create_pet(self, data: PetCreate) -> Pet:
        with self._lock:
            pet = Pet(id=self._next_id("pet"), **data.model_dump())
            self.pets[pet.id] = pet
            return _copy(pet)

    def update_pet(self, pet_id: int, updates: Mapping[str, Any]) -> Pet | None:
        with self._lock:
            pet = self.pets.get(pet_id)
            if pet is None:
                return None
            updated = _merge(pet, updates, "pet")
            self.pets[pet_id] = updated
            return _copy(updated)

    def get_public_pets(self) -> list[Pet]:
        with self._lock:
            return [_copy(p) for p in self.pets.values() if p.is_public]

    # -------------------------
    # Posts
    # -------------------------
    def get_post(self, post_id: int) -> Post | None:
        with self._lock:
            return _copy(self.posts.get(post_id))

    def get_posts_by_pet_id(self, pet_id: int) -> list[Post]:
        with self._lock:
            return [_copy(p) for p in self.posts.values() if p.pet_id == pet_id]

    def get_posts_for_feed(self, user_id: int) -> list[Post]:
        with self._lock:
            relevant_pet_ids = {p.id for p in self.pets.values() if p.owner_id == user_id}
            relevant_pet_ids.update(
                f.followed_pet_id for f in self.follows.values() if f.follower_id == user_id
            )
            feed = [p for p in self.posts.values() if p.pet_id in relevant_pet_ids]
            feed.sort(key=lambda p: (p.timestamp, p.id), reverse=True)
            return [_copy(p) for p in feed]

    def create_post(self, data: PostCreate) -> Post:
        with self._lock:
            post = Post(
                id=self._next_id("post"),
                likes_count=0,
                comments_count=0,
                timestamp=utcnow(),
                **data.model_dump(),
            )
            self.posts[post.id] = post
            return _copy(post)

    def update_post(self, post_id: int, updates: Mapping[str, Any]) -> Post | None:
        with self._lock:
            post = self.posts.get(post_id)
            if post is None:
                return None
            updated = _merge(post, updates, "post")
            self.posts[post_id] = updated
            return _copy(updated)

    def _bump_counter(self, post_id: int, field: str, delta: int) -> None:
        post = self.posts.get(post_id)
        if post is None:
            return
        value = max(getattr(post, field) + delta, 0)
        self.posts[post_id] = post.model_copy(update={field: value})

    # -------------------------
    # Medical records
    # -------------------------
    def get_medical_record(self, record_id: int) -> MedicalRecord | None:
        with self._lock:
            return _copy(self.medical_records.get(record_id))

    def get_medical_records_by_pet_id(self, pet_id: int) -> list[MedicalRecord]:
        with self._lock:
            return [_copy(r) for r in self.medical_records.values() if r.pet_id == pet_id]

    def create_medical_record(self, data: MedicalRecordCreate) -> MedicalRecord:
        with self._lock:
            record = MedicalRecord(id=self._next_id("medical_record"), **data.model_dump())
            self.medical_records[record.id] = record
            return _copy(record)

    def update_medical_record(self, record_id: int, updates: Mapping[str, Any]) -> MedicalRecord | None:
        with self._lock:
            record = self.medical_records.get(record_id)
            if record is None:
                return None
            updated = _merge(record, updates, "medical record")
            self.medical_records[record_id] = updated
            return _copy(updated)

    # -------------------------
    # Likes
    # -------------------------
    def get_like(self, user_id: int, post_id: int) -> Like | None:
        with self._lock:
            return _copy(self.likes.get((user_id, post_id)))

    def create_like(self, data: LikeCreate) -> Like:
        key = (data.user_id, data.post_id)
        with self._lock:
            if key in self.likes:
                raise UniqueViolationError("like", ("user_id", "post_id"))
            like = Like(id=self._next_id("like"), **data.model_dump())
            self.likes[key] = like
            self._bump_counter(data.post_id, "likes_count", 1)
            return _copy(like)

    def delete_like(self, user_id: int, post_id: int) -> bool:
        with self._lock:
            if self.likes.pop((user_id, post_id), None) is None:
                return False
            self._bump_counter(post_id, "likes_count", -1)
            return True

    def get_likes_by_post_id(self, post_id: int) -> list[Like]:
        with self._lock:
            likes = sorted((l for l in self.likes.values() if l.post_id == post_id), key=lambda l: l.id)
            return [_copy(l) for l in likes]

    # -------------------------
    # Follows
    # -------------------------
    def get_follow(self, follower_id: int, followed_pet_id: int) -> Follow | None:
        with self._lock:
            return _copy(self.follows.get((follower_id, followed_pet_id)))

    def create_follow(self, data: FollowCreate) -> Follow:
        key = (data.follower_id, data.followed_pet_id)
        with self._lock:
            if key in self.follows:
                raise UniqueViolationError("follow", ("follower_id", "followed_pet_id"))
            follow = Follow(id=self._next_id("follow"), **data.model_dump())
            self.follows[key] = follow
            return _copy(follow)

    def delete_follow(self, follower_id: int, followed_pet_id: int) -> bool:
        with self._lock:
            return self.follows.pop((follower_id, followed_pet_id), None) is not None

    def get_follows_by_user_id(self, user_id: int) -> list[Follow]:
        with self._lock:
            follows = sorted((f for f in self.follows.values() if f.follower_id == user_id), key=lambda f: f.id)
            return [_copy(f) for f in follows]

    # -------------------------
    # Comments
    # -------------------------
    def get_comment(self, comment_id: int) -> Comment | None:
        with self._lock:
            return _copy(self.comments.get(comment_id))

    def get_comments_by_post_id(self, post_id: int) -> list[Comment]:
        with self._lock:
            comments = [c for c in self.comments.values() if c.post_id == post_id]
            comments.sort(key=lambda c: (c.timestamp, c.id))
            return [_copy(c) for c in comments]

    def create_comment(self, data: CommentCreate) -> Comment:
        with self._lock:
            comment = Comment(id=self._next_id("comment"), timestamp=utcnow(), **data.model_dump())
            self.comments[comment.id] = comment
            self._bump_counter(data.post_id, "comments_count", 1)
            return _copy(comment)

    def delete_comment(self, comment_id: int) -> bool:
        with self._lock:
            comment = self.comments.pop(comment_id, None)
            if comment is None:
                return False
            self._bump_counter(comment.post_id, "comments_count", -1)
            return True

    # -------------------------
    # Matches
    # -------------------------
    def get_match(self, user_id: int, pet_id_1: int, pet_id_2: int) -> Match | None:
        with self._lock:
            return _copy(self.matches.get((user_id, *match_key(pet_id_1, pet_id_2))))

    def get_matches_by_user_id(self, user_id: int) -> list[Match]:
        with self._lock:
            matches = sorted((m for m in self.matches.values() if m.user_id == user_id), key=lambda m: m.id)
            return [_copy(m) for m in matches]

    def get_matches_for_pair(self, pet_id_1: int, pet_id_2: int) -> list[Match]:
        pair = match_key(pet_id_1, pet_id_2)
        with self._lock:
            matches = sorted(
                (m for m in self.matches.values() if (m.pet_id_1, m.pet_id_2) == pair),
                key=lambda m: m.id,
            )
            return [_copy(m) for m in matches]

    def create_match(self, data: MatchCreate) -> Match:
        low, high = match_key(data.pet_id_1, data.pet_id_2)
        key = (data.user_id, low, high)
        with self._lock:
            if key in self.matches:
                raise UniqueViolationError("match", ("user_id", "pet_id_1", "pet_id_2"))
            fields = data.model_dump()
            fields.update(pet_id_1=low, pet_id_2=high)
            match = Match(id=self._next_id("match"), timestamp=utcnow(), **fields)
            self.matches[key] = match
            return _copy(match)

    def update_match(self, match_id: int, updates: Mapping[str, Any]) -> Match | None:
        with self._lock:
            for key, match in self.matches.items():
                if match.id == match_id:
                    updated = _merge(match, updates, "match", MATCH_KEY_FIELDS)
                    self.matches[key] = updated
                    return _copy(updated)
            return None

    def get_potential_matches(self, user_id: int) -> list[Pet]:
        with self._lock:
            own_pet_ids = {p.id for p in self.pets.values() if p.owner_id == user_id}
            seen_pet_ids: set[int] = set()
            for match in self.matches.values():
                if match.pet_id_1 in own_pet_ids or match.pet_id_2 in own_pet_ids:
                    seen_pet_ids.update((match.pet_id_1, match.pet_id_2))

            return [
                _copy(p)
                for p in self.pets.values()
                if p.is_public and p.owner_id != user_id and p.id not in seen_pet_ids
            ]
