"""Module: main."""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pawconnect.api.v1.api import api_router
from pawconnect.api.v1.routes.deps import memory_storage
from pawconnect.core.config import settings
from pawconnect.core.logging import configure_logging
from pawconnect.db.init_db import init_db
from pawconnect.scripts.seed_data import seed_database
from pawconnect.storage import StorageError, UniqueViolationError

configure_logging(settings.log_level)
logger = logging.getLogger("pawconnect.api")

app = FastAPI(title="PawConnect API", version="0.1.0")

app.include_router(api_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


# The database constraint is the final word on duplicates that slip past route pre-checks.
@app.exception_handler(UniqueViolationError)
async def unique_violation_handler(request: Request, exc: UniqueViolationError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


if settings.storage_backend == "database":
    init_db()

if settings.seed_on_startup:
    if settings.storage_backend == "memory":
        seed_database(memory_storage)
    else:
        logger.warning("SEED_ON_STARTUP only seeds the memory backend; run python -m pawconnect.scripts.seed_data")
