"""Module: medical record schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MedicalRecordCreate(BaseModel):
    pet_id: int
    title: str
    date: datetime
    # vaccination, checkup, surgery, medication
    record_type: str
    type: str | None = None
    appointment_id: int | None = None
    veterinarian_id: int | None = None
    description: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    notes: str | None = None
    cost: str | None = None
    attachments: list[str] = Field(default_factory=list)
    # e.g. [{"name": "Carprofen", "dosage": "75mg", "frequency": "twice daily"}]
    prescriptions: list[dict[str, Any]] = Field(default_factory=list)
    next_due: datetime | None = None
    is_completed: bool = False


class MedicalRecord(MedicalRecordCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class MedicalRecordUpdate(BaseModel):
    title: str | None = None
    date: datetime | None = None
    record_type: str | None = None
    type: str | None = None
    description: str | None = None
    diagnosis: str | None = None
    treatment: str | None = None
    notes: str | None = None
    cost: str | None = None
    attachments: list[str] | None = None
    prescriptions: list[dict[str, Any]] | None = None
    next_due: datetime | None = None
    is_completed: bool | None = None

    @field_validator("title", "date", "record_type")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value
