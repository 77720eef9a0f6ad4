"""Shared fixtures: both storage backends, a fake recommendation generator and an API client."""

import os

# Settings are read at import time; keep the suite off any real database or API key.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ["GEMINI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pawconnect.db.base import Base
import pawconnect.db.models  # noqa
from pawconnect.schemas import PetCreate, PostCreate, UserCreate
from pawconnect.services.gemini import fallback_recommendations
from pawconnect.services.notifications import NotificationHub
from pawconnect.storage import DatabaseStorage, MemStorage


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Every storage test runs against both backends."""
    if request.param == "memory":
        yield MemStorage()
        return

    engine = make_engine()
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield DatabaseStorage(session)
    finally:
        session.close()
        engine.dispose()


class FakeGenerator:
    """Counts calls and answers with the static document, optionally tagged with the call number."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def generate(self, name, breed, age, gender, species="dog"):
        self.calls.append((name, breed, age, gender, species))
        if self.fail:
            raise RuntimeError("generator unavailable")
        document = fallback_recommendations()
        document.breeding_advice.optimal_age = f"call {len(self.calls)}"
        return document


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def hub():
    return NotificationHub()


@pytest.fixture(params=["memory", "database"])
def client(request, generator, hub):
    from pawconnect.api.v1.routes.deps import (
        get_notifier,
        get_recommendation_generator,
        get_storage,
    )
    from pawconnect.main import app

    if request.param == "memory":
        mem = MemStorage()

        def override_storage():
            return mem

        engine = None
    else:
        engine = make_engine()
        TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

        def override_storage():
            db = TestingSession()
            try:
                yield DatabaseStorage(db)
            finally:
                db.close()

    app.dependency_overrides[get_storage] = override_storage
    app.dependency_overrides[get_recommendation_generator] = lambda: generator
    app.dependency_overrides[get_notifier] = lambda: hub
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
        if engine is not None:
            engine.dispose()


# -------------------------
# Builders
# -------------------------

def make_user(storage, n: int = 1, **overrides):
    data = {
        "name": f"User {n}",
        "email": f"user{n}@example.com",
        "password": "secret",
        "username": f"user{n}",
    }
    data.update(overrides)
    return storage.create_user(UserCreate(**data))


def make_pet(storage, owner_id: int, name: str = "Rex", **overrides):
    data = {
        "owner_id": owner_id,
        "name": name,
        "breed": "Beagle",
        "age": 3,
        "gender": "Male",
        "species": "Dog",
    }
    data.update(overrides)
    return storage.create_pet(PetCreate(**data))


def make_post(storage, pet, caption: str = "hello"):
    return storage.create_post(
        PostCreate(pet_id=pet.id, user_id=pet.owner_id, image_url="https://img.example/1.jpg", caption=caption)
    )
