"""Module: medical_record."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pawconnect.db.base import Base


# Clinical history entry for a pet (vaccination, checkup, surgery, medication).
class MedicalRecord(Base):
    __tablename__ = "medical_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pet_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    appointment_id: Mapped[int] = mapped_column(Integer, nullable=True)
    veterinarian_id: Mapped[int] = mapped_column(Integer, nullable=True)

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=True)
    diagnosis: Mapped[str] = mapped_column(String, nullable=True)
    treatment: Mapped[str] = mapped_column(String, nullable=True)
    notes: Mapped[str] = mapped_column(String, nullable=True)
    cost: Mapped[str] = mapped_column(String, nullable=True)
    attachments: Mapped[list] = mapped_column(JSON, nullable=True, default=list)
    prescriptions: Mapped[list] = mapped_column(JSON, nullable=True, default=list)

    date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    record_type: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=True)
    next_due: Mapped[datetime] = mapped_column(DateTime, nullable=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=True, default=False)
