import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy.exc import IntegrityError

from conftest import make_pet, make_user
from pawconnect.schemas import FollowCreate, PetCreate, PostCreate, UserCreate
from pawconnect.storage import MemStorage
from pawconnect.storage.database import is_unique_violation


class TestMemStorageThreads:
    def test_scans_survive_concurrent_inserts(self):
        storage = MemStorage()
        owner = make_user(storage, 0)
        pet = make_pet(storage, owner.id)
        done = threading.Event()

        def write():
            try:
                for n in range(1, 500):
                    user = storage.create_user(UserCreate(name=f"U{n}", email=f"u{n}@example.com", password="x"))
                    storage.create_pet(PetCreate(owner_id=user.id, name="P", breed="Beagle", age=1, gender="Male"))
                    storage.create_post(PostCreate(pet_id=pet.id, user_id=owner.id, image_url="x.jpg"))
                    storage.create_follow(FollowCreate(follower_id=owner.id, followed_pet_id=n))
            finally:
                done.set()

        def read():
            scans = 0
            while not done.is_set() or scans == 0:
                storage.get_user_by_email("missing@example.com")
                storage.get_pets_by_user_id(-1)
                storage.get_posts_by_pet_id(-1)
                storage.get_follows_by_user_id(-1)
                scans += 1
            return scans

        with ThreadPoolExecutor(max_workers=5) as pool:
            readers = [pool.submit(read) for _ in range(4)]
            writer = pool.submit(write)
            writer.result()
            # Any "dictionary changed size during iteration" surfaces here.
            assert all(r.result() > 0 for r in readers)

        assert len(storage.get_public_pets()) == 500


class TestUniqueViolationDetection:
    def _error(self, orig) -> IntegrityError:
        return IntegrityError("INSERT ...", {}, orig)

    def test_sqlite_messages(self):
        assert is_unique_violation(self._error(sqlite3.IntegrityError("UNIQUE constraint failed: users.email")))
        assert not is_unique_violation(self._error(sqlite3.IntegrityError("NOT NULL constraint failed: pets.name")))
        assert not is_unique_violation(
            self._error(sqlite3.IntegrityError("CHECK constraint failed: ck_matches_pair_ordered"))
        )

    def test_postgres_sqlstate_wins_over_message(self):
        class DriverError(Exception):
            def __init__(self, message, sqlstate):
                super().__init__(message)
                self.sqlstate = sqlstate

        assert is_unique_violation(self._error(DriverError("duplicate key value", "23505")))
        assert not is_unique_violation(
            self._error(DriverError('new row violates check constraint "ck_matches_pair_ordered"', "23514"))
        )
