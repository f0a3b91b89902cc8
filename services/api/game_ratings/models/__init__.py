"""SQLAlchemy table definitions.

Tables:
- ratings: one row per user per game (name configurable)
"""

from game_ratings.models.rating import build_ratings_table

__all__ = ["build_ratings_table"]
