"""API route registration."""

from fastapi import APIRouter

from phonedrop.api.routes import files, health, upload

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(upload.router, tags=["upload"])
api_router.include_router(files.router, tags=["files"])
