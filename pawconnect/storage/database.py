"""Relational storage backend running on a SQLAlchemy session."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import delete, desc, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from pawconnect.db import models
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

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (postgres); SQLite only reports it in the message.
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for duplicate-key errors, False for NOT NULL, CHECK and other integrity errors."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_SQLSTATE
    message = str(orig).lower()
    return "unique constraint" in message or "duplicate key" in message


class DatabaseStorage(Storage):
    """
    Each mutating call is one transaction: it commits on success and rolls
    back on failure. Unique constraints are enforced by the database; a
    duplicate-key IntegrityError surfaces as UniqueViolationError, any other
    constraint failure as StorageError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self, entity: str, unique_fields: tuple[str, ...] = ()) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if unique_fields and is_unique_violation(exc):
                logger.warning("Rejected %s write violating unique %s", entity, unique_fields)
                raise UniqueViolationError(entity, unique_fields) from exc
            logger.warning("Rejected %s write violating a constraint: %s", entity, exc.orig)
            raise StorageError(f"{entity} write violates a database constraint") from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _insert(self, row, record_type, entity: str, unique_fields: tuple[str, ...] = ()):
        with self._transaction(entity, unique_fields):
            self.db.add(row)
        self.db.refresh(row)
        return record_type.model_validate(row)

    def _update(self, model, record_type, row_id: int, updates: Mapping[str, Any],
                entity: str, immutable: frozenset[str] = frozenset(), unique_fields: tuple[str, ...] = ()):
        row = self.db.get(model, row_id)
        if row is None:
            return None

        with self._transaction(entity, unique_fields):
            for key, value in updatable_fields(record_type, updates, immutable).items():
                setattr(row, key, value)
        self.db.refresh(row)
        return record_type.model_validate(row)

    def _first(self, stmt, record_type):
        row = self.db.execute(stmt).scalars().first()
        return record_type.model_validate(row) if row is not None else None

    def _all(self, stmt, record_type) -> list:
        return [record_type.model_validate(row) for row in self.db.execute(stmt).scalars().all()]

    # -------------------------
    # Users
    # -------------------------
    def get_user(self, user_id: int) -> User | None:
        return self._first(select(models.User).where(models.User.id == user_id), User)

    def get_user_by_email(self, email: str) -> User | None:
        return self._first(select(models.User).where(models.User.email == email), User)

    def get_user_by_username(self, username: str) -> User | None:
        return self._first(select(models.User).where(models.User.username == username), User)

    def create_user(self, data: UserCreate) -> User:
        return self._insert(models.User(**data.model_dump()), User, "user", ("email", "username"))

    def update_user(self, user_id: int, updates: Mapping[str, Any]) -> User | None:
        return self._update(models.User, User, user_id, updates, "user", unique_fields=("email", "username"))

    # -------------------------
    # Pets
    # -------------------------
    def get_pet(self, pet_id: int) -> Pet | None:
        return self._first(select(models.Pet).where(models.Pet.id == pet_id), Pet)

    def get_pets_by_user_id(self, user_id: int) -> list[Pet]:
        stmt = select(models.Pet).where(models.Pet.owner_id == user_id).order_by(models.Pet.id)
        return self._all(stmt, Pet)

    def create_pet(self, data: PetCreate) -> Pet:
        return self._insert(models.Pet(**data.model_dump()), Pet, "pet")

    def update_pet(self, pet_id: int, updates: Mapping[str, Any]) -> Pet | None:
        return self._update(models.Pet, Pet, pet_id, updates, "pet")

    def get_public_pets(self) -> list[Pet]:
        stmt = select(models.Pet).where(models.Pet.is_public.is_(True)).order_by(models.Pet.id)
        return self._all(stmt, Pet)

    # -------------------------
    # Posts
    # -------------------------
    def get_post(self, post_id: int) -> Post | None:
        return self._first(select(models.Post).where(models.Post.id == post_id), Post)

    def get_posts_by_pet_id(self, pet_id: int) -> list[Post]:
        stmt = select(models.Post).where(models.Post.pet_id == pet_id).order_by(models.Post.id)
        return self._all(stmt, Post)

    def get_posts_for_feed(self, user_id: int) -> list[Post]:
        own_pet_ids = select(models.Pet.id).where(models.Pet.owner_id == user_id)
        followed_pet_ids = select(models.Follow.followed_pet_id).where(models.Follow.follower_id == user_id)

        stmt = (
            select(models.Post)
            .where(
                or_(
                    models.Post.pet_id.in_(own_pet_ids),
                    models.Post.pet_id.in_(followed_pet_ids),
                )
            )
            .order_by(desc(models.Post.timestamp), desc(models.Post.id))
        )
        return self._all(stmt, Post)

    def create_post(self, data: PostCreate) -> Post:
        row = models.Post(**data.model_dump(), likes_count=0, comments_count=0)
        return self._insert(row, Post, "post")

    def update_post(self, post_id: int, updates: Mapping[str, Any]) -> Post | None:
        return self._update(models.Post, Post, post_id, updates, "post")

    def _bump_counter(self, post_id: int, column, delta: int) -> None:
        # Single UPDATE with a SQL expression so concurrent writers cannot lose increments.
        stmt = update(models.Post).where(models.Post.id == post_id)
        if delta < 0:
            stmt = stmt.where(column > 0)
        stmt = stmt.values({column: column + delta}).execution_options(synchronize_session=False)
        self.db.execute(stmt)

    # -------------------------
    # Medical records
    # -------------------------
    def get_medical_record(self, record_id: int) -> MedicalRecord | None:
        stmt = select(models.MedicalRecord).where(models.MedicalRecord.id == record_id)
        return self._first(stmt, MedicalRecord)

    def get_medical_records_by_pet_id(self, pet_id: int) -> list[MedicalRecord]:
        stmt = (
            select(models.MedicalRecord)
            .where(models.MedicalRecord.pet_id == pet_id)
            .order_by(models.MedicalRecord.id)
        )
        return self._all(stmt, MedicalRecord)

    def create_medical_record(self, data: MedicalRecordCreate) -> MedicalRecord:
        return self._insert(models.MedicalRecord(**data.model_dump()), MedicalRecord, "medical record")

    def update_medical_record(self, record_id: int, updates: Mapping[str, Any]) -> MedicalRecord | None:
        return self._update(models.MedicalRecord, MedicalRecord, record_id, updates, "medical record")

    # -------------------------
    # Likes
    # -------------------------
    def _like_stmt(self, user_id: int, post_id: int):
        return select(models.Like).where(models.Like.user_id == user_id, models.Like.post_id == post_id)

    def get_like(self, user_id: int, post_id: int) -> Like | None:
        return self._first(self._like_stmt(user_id, post_id), Like)

    def create_like(self, data: LikeCreate) -> Like:
        row = models.Like(**data.model_dump())
        with self._transaction("like", ("user_id", "post_id")):
            self.db.add(row)
            self.db.flush()
            self._bump_counter(data.post_id, models.Post.likes_count, 1)
        self.db.refresh(row)
        return Like.model_validate(row)

    def delete_like(self, user_id: int, post_id: int) -> bool:
        # One DELETE decides the outcome, so a concurrent unlike of the same pair sees 0 rows.
        stmt = delete(models.Like).where(models.Like.user_id == user_id, models.Like.post_id == post_id)
        with self._transaction("like"):
            deleted = self.db.execute(stmt).rowcount
            if deleted:
                self._bump_counter(post_id, models.Post.likes_count, -1)
        return deleted > 0

    def get_likes_by_post_id(self, post_id: int) -> list[Like]:
        stmt = select(models.Like).where(models.Like.post_id == post_id).order_by(models.Like.id)
        return self._all(stmt, Like)

    # -------------------------
    # Follows
    # -------------------------
    def _follow_stmt(self, follower_id: int, followed_pet_id: int):
        return select(models.Follow).where(
            models.Follow.follower_id == follower_id,
            models.Follow.followed_pet_id == followed_pet_id,
        )

    def get_follow(self, follower_id: int, followed_pet_id: int) -> Follow | None:
        return self._first(self._follow_stmt(follower_id, followed_pet_id), Follow)

    def create_follow(self, data: FollowCreate) -> Follow:
        return self._insert(models.Follow(**data.model_dump()), Follow, "follow", ("follower_id", "followed_pet_id"))

    def delete_follow(self, follower_id: int, followed_pet_id: int) -> bool:
        stmt = delete(models.Follow).where(
            models.Follow.follower_id == follower_id,
            models.Follow.followed_pet_id == followed_pet_id,
        )
        with self._transaction("follow"):
            deleted = self.db.execute(stmt).rowcount
        return deleted > 0

    def get_follows_by_user_id(self, user_id: int) -> list[Follow]:
        stmt = select(models.Follow).where(models.Follow.follower_id == user_id).order_by(models.Follow.id)
        return self._all(stmt, Follow)

    # -------------------------
    # Comments
    # -------------------------
    def get_comment(self, comment_id: int) -> Comment | None:
        return self._first(select(models.Comment).where(models.Comment.id == comment_id), Comment)

    def get_comments_by_post_id(self, post_id: int) -> list[Comment]:
        stmt = (
            select(models.Comment)
            .where(models.Comment.post_id == post_id)
            .order_by(models.Comment.timestamp, models.Comment.id)
        )
        return self._all(stmt, Comment)

    def create_comment(self, data: CommentCreate) -> Comment:
        row = models.Comment(**data.model_dump())
        with self._transaction("comment"):
            self.db.add(row)
            self.db.flush()
            self._bump_counter(data.post_id, models.Post.comments_count, 1)
        self.db.refresh(row)
        return Comment.model_validate(row)

    def delete_comment(self, comment_id: int) -> bool:
        post_id = self.db.execute(
            select(models.Comment.post_id).where(models.Comment.id == comment_id)
        ).scalar_one_or_none()
        if post_id is None:
            return False

        with self._transaction("comment"):
            deleted = self.db.execute(delete(models.Comment).where(models.Comment.id == comment_id)).rowcount
            if deleted:
                self._bump_counter(post_id, models.Post.comments_count, -1)
        return deleted > 0

    # -------------------------
    # Matches
    # -------------------------
    def get_match(self, user_id: int, pet_id_1: int, pet_id_2: int) -> Match | None:
        low, high = match_key(pet_id_1, pet_id_2)
        stmt = select(models.Match).where(
            models.Match.user_id == user_id,
            models.Match.pet_id_1 == low,
            models.Match.pet_id_2 == high,
        )
        return self._first(stmt, Match)

    def get_matches_by_user_id(self, user_id: int) -> list[Match]:
        stmt = select(models.Match).where(models.Match.user_id == user_id).order_by(models.Match.id)
        return self._all(stmt, Match)

    def get_matches_for_pair(self, pet_id_1: int, pet_id_2: int) -> list[Match]:
        low, high = match_key(pet_id_1, pet_id_2)
        stmt = (
            select(models.Match)
            .where(models.Match.pet_id_1 == low, models.Match.pet_id_2 == high)
            .order_by(models.Match.id)
        )
        return self._all(stmt, Match)

    def create_match(self, data: MatchCreate) -> Match:
        low, high = match_key(data.pet_id_1, data.pet_id_2)
        fields = data.model_dump()
        fields.update(pet_id_1=low, pet_id_2=high)
        return self._insert(models.Match(**fields), Match, "match", ("user_id", "pet_id_1", "pet_id_2"))

    def update_match(self, match_id: int, updates: Mapping[str, Any]) -> Match | None:
        return self._update(models.Match, Match, match_id, updates, "match", MATCH_KEY_FIELDS)

    def get_potential_matches(self, user_id: int) -> list[Pet]:
        own_pet_ids = select(models.Pet.id).where(models.Pet.owner_id == user_id)
        involved = select(models.Match.pet_id_1, models.Match.pet_id_2).where(
            or_(
                models.Match.pet_id_1.in_(own_pet_ids),
                models.Match.pet_id_2.in_(own_pet_ids),
            )
        )
        seen_pet_ids: set[int] = set()
        for pet_id_1, pet_id_2 in self.db.execute(involved):
            seen_pet_ids.update((pet_id_1, pet_id_2))

        stmt = (
            select(models.Pet)
            .where(models.Pet.is_public.is_(True), models.Pet.owner_id != user_id)
            .order_by(models.Pet.id)
        )
        if seen_pet_ids:
            stmt = stmt.where(models.Pet.id.not_in(seen_pet_ids))
        return self._all(stmt, Pet)
