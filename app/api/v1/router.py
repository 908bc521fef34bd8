"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1 import recommendations, users, genres, links

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(recommendations.router, prefix="/recommendations", tags=["Recommendations"])
api_router.include_router(genres.router, prefix="/genres", tags=["Genres"])
api_router.include_router(links.router, prefix="/links", tags=["Links"])
