"""Module: base."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase

# Shared SQLAlchemy declarative base that all ORM models inherit from.
# This gives each model access to common metadata for table creation/migrations.
class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Naive UTC so SQLite and postgres round-trip the same value.
    return datetime.now(UTC).replace(tzinfo=None)
