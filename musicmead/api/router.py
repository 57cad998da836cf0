from fastapi import APIRouter

from .endpoints import admin_endpoint, health, prompts_endpoint, search_endpoint, spotify_auth_endpoint, submission_endpoint

api_router = APIRouter()

api_router.include_router(prompts_endpoint.router, tags=["prompts"])
api_router.include_router(search_endpoint.router, tags=["catalog"])
api_router.include_router(submission_endpoint.router, tags=["submissions"])
api_router.include_router(admin_endpoint.router, prefix="/admin", tags=["admin"])

# Mounted outside /api
auth_router = APIRouter()
auth_router.include_router(spotify_auth_endpoint.router, prefix="/auth", tags=["auth"])
auth_router.include_router(health.router, tags=["health"])
