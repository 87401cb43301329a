from fastapi import APIRouter

from app.features.accessibility.routes.checks import router as checks_router
from app.features.health.routes.health import router as health_router


api_router = APIRouter()

# Register all feature routes
api_router.include_router(checks_router)
api_router.include_router(health_router)
