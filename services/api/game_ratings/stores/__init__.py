"""Data stores for persistence.

Stores handle:
- RatingRepository: the interface routes depend on
- PostgreSQL: connection pool, queries, upserts

No HTTP or authentication logic in stores - that belongs in routes/services.
"""

from game_ratings.stores.base import RatingRepository, RatingValidationError, RepositoryError

__all__ = ["RatingRepository", "RatingValidationError", "RepositoryError"]
