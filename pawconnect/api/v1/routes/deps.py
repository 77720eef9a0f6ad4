"""Module: deps."""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from pawconnect.core.config import settings
from pawconnect.db.session import SessionLocal
from pawconnect.services.gemini import get_generator
from pawconnect.services.notifications import NotificationHub, notifications
from pawconnect.services.recommendations import RecommendationGenerator, RecommendationService
from pawconnect.storage import DatabaseStorage, MemStorage, Storage

# Process-wide in-memory backend, used when STORAGE_BACKEND=memory.
memory_storage = MemStorage()


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_storage(db: Session = Depends(get_db)) -> Storage:
    if settings.storage_backend == "memory":
        return memory_storage
    return DatabaseStorage(db)


def get_recommendation_generator() -> RecommendationGenerator:
    return get_generator()


def get_recommendation_service(
    storage: Storage = Depends(get_storage),
    generator: RecommendationGenerator = Depends(get_recommendation_generator),
) -> RecommendationService:
    return RecommendationService(storage, generator, always_regenerate=settings.always_regenerate_recommendations)


def get_notifier() -> NotificationHub:
    return notifications
