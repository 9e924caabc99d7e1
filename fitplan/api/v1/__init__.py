"""API v1 router aggregation."""

from fastapi import APIRouter

from fitplan.api.v1.endpoints import (
    admin,
    catalog,
    challenges,
    community,
    health,
    photos,
    profile,
    quiz,
    settings,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(quiz.router, prefix="/quiz", tags=["quiz"])
api_router.include_router(photos.router, prefix="/photos", tags=["photos"])
api_router.include_router(community.router, prefix="/community", tags=["community"])
api_router.include_router(challenges.router, prefix="/challenges", tags=["challenges"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
