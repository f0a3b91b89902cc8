"""Rating repository interface.

Handlers depend only on this interface, so the backing store can be
swapped (or faked in tests) without touching the routes.
"""

from abc import ABC, abstractmethod

from game_ratings.schemas import AvgRating, Rating


class RepositoryError(RuntimeError):
    """The store could not be reached or a query failed."""


class RatingValidationError(ValueError):
    """A rating failed validation and was not written."""


class RatingRepository(ABC):
    """Read/write access to stored game ratings."""

    @abstractmethod
    async def initialize(self) -> None:
        """Connect to the store and verify it is reachable.

        Raises:
            RepositoryError: If the store cannot be reached.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the repository."""
        pass

    @abstractmethod
    async def get_avg_ratings(self) -> list[AvgRating]:
        """Average rating of every rated game, highest average first.

        Returns an empty list when nothing has been rated.
        """
        pass

    @abstractmethod
    async def get_rating(self, game_id: str, user_id: str) -> Rating:
        """Rating given by `user_id` to `game_id`.

        A game the user never rated yields a rating of 0, not an error.
        """
        pass

    @abstractmethod
    async def put_rating(self, rating: Rating) -> None:
        """Insert or replace the rating for (game_id, user_id).

        Raises:
            RatingValidationError: If the rating is outside 1..5.
                Nothing is written in that case.
            RepositoryError: If the write fails.
        """
        pass
