"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from replate.api.endpoints import auth, health, listings

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
