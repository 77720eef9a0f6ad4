"""Module: seed_data."""

import logging
import random
import string

from faker import Faker

from pawconnect.core.security import hash_password
from pawconnect.schemas import (
    CommentCreate,
    FollowCreate,
    LikeCreate,
    MedicalRecordCreate,
    Pet,
    PetCreate,
    PostCreate,
    User,
    UserCreate,
)
from pawconnect.storage import Storage

logger = logging.getLogger(__name__)

fake = Faker()

DEMO_PASSWORD = "password123"

DOG_BREEDS = [
    "Labrador Retriever",
    "German Shepherd",
    "Golden Retriever",
    "French Bulldog",
    "Poodle",
    "Beagle",
    "Dachshund",
    "Border Collie",
    "Siberian Husky",
    "Boxer",
]

CAT_BREEDS = [
    "Domestic Shorthair",
    "Maine Coon",
    "Ragdoll",
    "Persian",
    "Siamese",
    "Bengal",
    "British Shorthair",
]

PET_PHOTOS = [
    "https://images.pexels.com/photos/1805164/pexels-photo-1805164.jpeg",
    "https://images.pexels.com/photos/2253275/pexels-photo-2253275.jpeg",
    "https://images.pexels.com/photos/1170986/pexels-photo-1170986.jpeg",
    "https://images.pexels.com/photos/45201/kitty-cat-kitten-pet-45201.jpeg",
]

RECORD_TYPES = ["vaccination", "checkup", "surgery", "medication"]

PRESCRIPTION_POOL = [
    {"name": "Carprofen", "dosage": "25mg", "frequency": "twice daily"},
    {"name": "Amoxicillin", "dosage": "250mg", "frequency": "twice daily"},
    {"name": "Apoquel", "dosage": "16mg", "frequency": "once daily"},
]


def seed_users(storage: Storage, n: int = 10) -> list[User]:
    # Every demo account shares one password so the client can log in.
    password = hash_password(DEMO_PASSWORD)
    users: list[User] = []
    for _ in range(n):
        first_name, last_name = fake.first_name(), fake.last_name()
        users.append(storage.create_user(UserCreate(
            name=f"{first_name} {last_name}",
            email=fake.unique.email(),
            username=fake.unique.user_name(),
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone=fake.phone_number(),
            bio=fake.sentence(nb_words=10),
            location=f"{fake.city()}, {fake.state_abbr()}",
        )))
    return users


def seed_pets(storage: Storage, users: list[User], per_user: int = 2) -> list[Pet]:
    pets: list[Pet] = []
    for user in users:
        for _ in range(random.randint(1, per_user)):
            species = random.choice(["Dog", "Cat"])
            pets.append(storage.create_pet(PetCreate(
                owner_id=user.id,
                name=fake.first_name(),
                species=species,
                breed=random.choice(DOG_BREEDS if species == "Dog" else CAT_BREEDS),
                age=random.randint(1, 12),
                gender=random.choice(["Male", "Female"]),
                weight=f"{random.uniform(3, 40):.1f}",
                color=fake.color_name(),
                bio=fake.sentence(nb_words=8),
                is_public=random.random() < 0.9,
                profile_image=random.choice(PET_PHOTOS),
                microchip_id="".join(random.choice(string.digits) for _ in range(15)),
                next_vaccination=fake.date_time_between(start_date="now", end_date="+6M"),
                last_checkup=fake.date_time_between(start_date="-1y", end_date="now"),
            )))
    return pets


def seed_social(storage: Storage, users: list[User], pets: list[Pet]) -> tuple[int, int, int, int]:
    """Posts for every pet, then follows, likes and comments between users."""
    posts = []
    for pet in pets:
        for _ in range(random.randint(1, 3)):
            posts.append(storage.create_post(PostCreate(
                pet_id=pet.id,
                user_id=pet.owner_id,
                image_url=random.choice(PET_PHOTOS),
                caption=fake.sentence(nb_words=6),
                location=fake.city(),
            )))

    follow_n = like_n = comment_n = 0
    for user in users:
        others = [p for p in pets if p.owner_id != user.id]
        for pet in random.sample(others, k=min(3, len(others))):
            storage.create_follow(FollowCreate(follower_id=user.id, followed_pet_id=pet.id))
            follow_n += 1

        for post in random.sample(posts, k=min(5, len(posts))):
            storage.create_like(LikeCreate(user_id=user.id, post_id=post.id))
            like_n += 1
            if random.random() < 0.4:
                storage.create_comment(CommentCreate(user_id=user.id, post_id=post.id, content=fake.sentence()))
                comment_n += 1

    return len(posts), follow_n, like_n, comment_n


def seed_medical_records(storage: Storage, pets: list[Pet]) -> int:
    n = 0
    for pet in pets:
        if random.random() < 0.5:
            continue
        record_type = random.choice(RECORD_TYPES)
        storage.create_medical_record(MedicalRecordCreate(
            pet_id=pet.id,
            title=f"{record_type.title()} visit",
            date=fake.date_time_between(start_date="-1y", end_date="now"),
            record_type=record_type,
            type="wellness" if record_type in ("vaccination", "checkup") else "treatment",
            diagnosis=fake.sentence(nb_words=5),
            treatment=fake.sentence(nb_words=6),
            cost=f"{random.randint(40, 900)}.00",
            prescriptions=random.sample(PRESCRIPTION_POOL, k=1) if record_type == "medication" else [],
            next_due=fake.date_time_between(start_date="now", end_date="+1y"),
            is_completed=random.random() < 0.8,
        ))
        n += 1
    return n


def seed_database(storage: Storage, n_users: int = 10) -> None:
    logger.info("Starting database seeding for PawConnect...")
    users = seed_users(storage, n_users)
    pets = seed_pets(storage, users)
    post_n, follow_n, like_n, comment_n = seed_social(storage, users, pets)
    record_n = seed_medical_records(storage, pets)
    logger.info(
        "Seeded users=%s, pets=%s, posts=%s, follows=%s, likes=%s, comments=%s, medical_records=%s",
        len(users), len(pets), post_n, follow_n, like_n, comment_n, record_n,
    )
    logger.info("Demo accounts use password %r, e.g. %s", DEMO_PASSWORD, users[0].email if users else "-")


if __name__ == "__main__":
    # python -m pawconnect.scripts.seed_data
    from pawconnect.core.config import settings
    from pawconnect.core.logging import configure_logging
    from pawconnect.db.init_db import init_db
    from pawconnect.db.session import SessionLocal
    from pawconnect.storage import DatabaseStorage

    configure_logging(settings.log_level)
    init_db()
    session = SessionLocal()
    try:
        seed_database(DatabaseStorage(session))
    finally:
        session.close()
