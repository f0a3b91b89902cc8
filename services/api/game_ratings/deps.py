"""FastAPI dependencies for shared resources and the authenticated user."""

from fastapi import HTTPException, Request, status

from game_ratings.schemas import User
from game_ratings.stores import RatingRepository


def get_repository(request: Request) -> RatingRepository:
    """Rating repository configured in create_app."""
    return request.app.state.repository


def get_current_user(request: Request) -> User:
    """User attached by AuthenticationMiddleware.

    Raises 403 if the request was not authenticated, which only happens
    when a route is mounted without the middleware.
    """
    user = getattr(request.state, "user", None)
    if not isinstance(user, User):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return user
