from sqlalchemy import Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pawconnect.db.base import Base

# A user following a pet (not another user).
class Follow(Base):
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "followed_pet_id", name="uq_follows_follower_pet"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    follower_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    followed_pet_id: Mapped[int] = mapped_column(Integer, nullable=False)
