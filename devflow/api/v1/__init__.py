"""API v1 routes."""

from fastapi import APIRouter

from devflow.api.v1 import auth, health, projects

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(projects.router, prefix="/projects", tags=["projects"])
