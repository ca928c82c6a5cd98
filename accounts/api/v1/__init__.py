"""API v1 routes."""

from fastapi import APIRouter

from accounts.api.v1 import admin, auth, health, profile

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(profile.router, prefix="/adminuser", tags=["profile"])
