"""Versioned API route modules."""

from fastapi import APIRouter

from huntcore.api.routes.config import router as config_router
from huntcore.api.routes.control import router as control_router
from huntcore.api.routes.decision import router as decision_router
from huntcore.api.routes.events import router as events_router
from huntcore.api.routes.heatmap import router as heatmap_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(decision_router, tags=["Decision"])
api_router.include_router(heatmap_router, tags=["Heatmap"])
api_router.include_router(events_router, tags=["Events"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
