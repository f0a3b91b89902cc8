"""Schemas for ratings and the authenticated user."""

from pydantic import BaseModel, Field

MIN_RATING = 1
MAX_RATING = 5


def is_valid_rating(value: object) -> bool:
    """Return True if `value` is an integer between 1 and 5 inclusive."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_RATING <= value <= MAX_RATING


class User(BaseModel):
    """User resolved by the verifier.

    Only `id` is used by the service; the rest is carried through as returned.
    """

    id: str = Field(min_length=1)
    email: str | None = None
    nickname: str | None = None
    profile_photo: str | None = None

    model_config = {"extra": "ignore"}


class Rating(BaseModel):
    """A single user's rating of a game.

    `user_id` is internal and never serialized to clients. A rating of 0
    means the user has not rated the game yet.
    """

    user_id: str = Field(default="", exclude=True)
    game_id: str
    rating: int = 0

    def is_valid(self) -> bool:
        """Whether this rating may be persisted."""
        return is_valid_rating(self.rating)


class AvgRating(BaseModel):
    """Average of all users' ratings for a game."""

    game_id: str
    rating: float


class RatingUpdate(BaseModel):
    """Request body for PUT /{game_id}."""

    rating: int = Field(strict=True)
