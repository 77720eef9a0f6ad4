"""Module: match."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pawconnect.db.base import Base, utcnow


# One user's swipe on a pair of pets. The pair is stored ordered
# (pet_id_1 <= pet_id_2) so both swipe orders map to the same key.
class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("user_id", "pet_id_1", "pet_id_2", name="uq_matches_user_pair"),
        CheckConstraint("pet_id_1 <= pet_id_2", name="ck_matches_pair_ordered"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    pet_id_1: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    pet_id_2: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    is_match: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # "left" or "right"
    swipe_direction: Mapped[str] = mapped_column(String, nullable=False)

    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
