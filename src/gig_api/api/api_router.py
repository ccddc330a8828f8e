"""API router initialization."""

from fastapi import APIRouter
from loguru import logger

from gig_api.api.auth import router as auth_router
from gig_api.api.users import router as users_router

# Create main API router
router = APIRouter()

# Mount API endpoints
router.include_router(auth_router, prefix="/auth", tags=["auth"])
router.include_router(users_router, prefix="/users", tags=["users"])

logger.debug("API router initialized (auth, users routers mounted)")
