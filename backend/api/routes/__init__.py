"""API Routes."""

from fastapi import APIRouter

from .health import router as health_router
from .organizations import router as organizations_router
from .projects import router as projects_router
from .recovery import router as recovery_router
from .tasks import router as tasks_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(organizations_router)
api_router.include_router(projects_router)
api_router.include_router(tasks_router)
api_router.include_router(recovery_router)
