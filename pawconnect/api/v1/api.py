"""Module: api."""

from fastapi import APIRouter

# Core operational routes (health/auth/notifications).
from pawconnect.api.v1.routes.health import router as health_router
from pawconnect.api.v1.routes.auth import router as auth_router
from pawconnect.api.v1.routes.notifications import router as notifications_router

# Domain routes used by the PawConnect client.
from pawconnect.api.v1.routes.users import router as users_router
from pawconnect.api.v1.routes.pets import router as pets_router
from pawconnect.api.v1.routes.posts import router as posts_router
from pawconnect.api.v1.routes.likes import router as likes_router
from pawconnect.api.v1.routes.follows import router as follows_router
from pawconnect.api.v1.routes.comments import router as comments_router
from pawconnect.api.v1.routes.matches import router as matches_router
from pawconnect.api.v1.routes.medical_records import router as medical_records_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])

# Register business/domain endpoints consumed by the application UI.
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(posts_router, prefix="/posts", tags=["posts"])
api_router.include_router(likes_router, prefix="/likes", tags=["likes"])
api_router.include_router(follows_router, prefix="/follows", tags=["follows"])
api_router.include_router(comments_router, prefix="/comments", tags=["comments"])
api_router.include_router(matches_router, prefix="/matches", tags=["matches"])
api_router.include_router(medical_records_router, prefix="/medical-records", tags=["medical-records"])
