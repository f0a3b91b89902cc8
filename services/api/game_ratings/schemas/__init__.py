"""Pydantic schemas for API request/response validation."""

from game_ratings.schemas.common import ApiError, ErrorDetail, ErrorResponse, error_response
from game_ratings.schemas.rating import (
    AvgRating,
    Rating,
    RatingUpdate,
    User,
    is_valid_rating,
)

__all__ = [
    "ApiError",
    "ErrorDetail",
    "ErrorResponse",
    "error_response",
    "AvgRating",
    "Rating",
    "RatingUpdate",
    "User",
    "is_valid_rating",
]
