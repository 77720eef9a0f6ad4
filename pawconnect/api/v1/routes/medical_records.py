from fastapi import APIRouter, Depends, HTTPException

from pawconnect.api.v1.routes.deps import get_storage
from pawconnect.schemas import MedicalRecord, MedicalRecordCreate, MedicalRecordUpdate
from pawconnect.storage import Storage

router = APIRouter()


@router.get("/pet/{pet_id}", response_model=list[MedicalRecord])
def list_pet_records(pet_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_medical_records_by_pet_id(pet_id)


@router.post("", response_model=MedicalRecord)
def create_record(payload: MedicalRecordCreate, storage: Storage = Depends(get_storage)):
    if not storage.get_pet(payload.pet_id):
        raise HTTPException(status_code=404, detail="Pet not found")
    return storage.create_medical_record(payload)


@router.get("/{record_id}", response_model=MedicalRecord)
def get_record(record_id: int, storage: Storage = Depends(get_storage)):
    record = storage.get_medical_record(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Medical record not found")
    return record


@router.put("/{record_id}", response_model=MedicalRecord)
@router.patch("/{record_id}", response_model=MedicalRecord)
def update_record(record_id: int, payload: MedicalRecordUpdate, storage: Storage = Depends(get_storage)):
    record = storage.update_medical_record(record_id, payload.model_dump(exclude_unset=True))
    if not record:
        raise HTTPException(status_code=404, detail="Medical record not found")
    return record
