"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.goals import dashboard_router
from api.v1.routes.goals import router as goals_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.year_progress import router as year_progress_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(dashboard_router)
router.include_router(goals_router)
router.include_router(profiles_router)
router.include_router(year_progress_router)
