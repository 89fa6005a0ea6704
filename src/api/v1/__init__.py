"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.posts import router as posts_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.users import auth_router
from api.v1.routes.users import router as users_router
from api.v1.schemas.common import ErrorResponse

# Error bodies every v1 route may return
router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    }
)
router.include_router(users_router)
router.include_router(auth_router)
router.include_router(profiles_router)
router.include_router(posts_router)
