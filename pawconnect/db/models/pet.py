"""Module: pet."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pawconnect.db.base import Base


# Pet profile: the unit of following, posting and matching.
class Pet(Base):
    __tablename__ = "pets"

    # Primary Key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Ownership (user_id mirrors owner_id for older clients)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=True)

    # Basic Info
    name: Mapped[str] = mapped_column(String, nullable=False)
    species: Mapped[str] = mapped_column(String, nullable=True)
    breed: Mapped[str] = mapped_column(String, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String, nullable=False)
    weight: Mapped[str] = mapped_column(String, nullable=True)
    color: Mapped[str] = mapped_column(String, nullable=True)
    bio: Mapped[str] = mapped_column(String, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=True, default=True)

    # Photos
    profile_image: Mapped[str] = mapped_column(String, nullable=True)
    avatar: Mapped[str] = mapped_column(String, nullable=True)
    photos: Mapped[list] = mapped_column(JSON, nullable=True, default=list)

    # Health
    microchip_id: Mapped[str] = mapped_column(String, nullable=True)
    next_vaccination: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    last_checkup: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    last_visit: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    health_tips: Mapped[list] = mapped_column(JSON, nullable=True, default=list)
    diet_recommendations: Mapped[str] = mapped_column(String, nullable=True)

    # Generated care document, cached until regenerated
    ai_recommendations: Mapped[dict] = mapped_column(JSON, nullable=True)
