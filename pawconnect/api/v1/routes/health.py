"""Module: health."""

from fastapi import APIRouter

router = APIRouter()

# Endpoint: liveness check for the service.
@router.get("")
def health():
    return {"status": "ok"}
