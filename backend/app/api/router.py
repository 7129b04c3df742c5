"""
Ann Investment Portal - Main API Router
Combines all endpoint routers
"""
from fastapi import APIRouter

from .endpoints import auth, health, admin, users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["Health"]
)

api_router.include_router(
    auth.router,
    tags=["Authentication"]
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"]
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"]
)
