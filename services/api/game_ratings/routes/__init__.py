"""API routes."""

from fastapi import APIRouter

from game_ratings.routes import ratings

api_router = APIRouter()

# Ratings endpoints (mounted at the root)
api_router.include_router(ratings.router, tags=["ratings"])
