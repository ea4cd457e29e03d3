"""
Routers API pour MoveRings.

Ce module regroupe tous les sous-routers et expose un router principal
a inclure dans l'application FastAPI.
"""
from fastapi import APIRouter

from app.api.routers.auth_router import router as auth_router
from app.api.routers.workout_router import router as workout_router
from app.api.routers.activity_router import router as activity_router
from app.api.routers._shared import limiter

router = APIRouter()

router.include_router(auth_router)
router.include_router(workout_router)
router.include_router(activity_router)

__all__ = ["router", "limiter"]
