"""Business logic services.

Services are called by routes and middleware and accept dependencies explicitly.
"""

from game_ratings.services.auth import AuthenticationError, VerifierClient

__all__ = ["AuthenticationError", "VerifierClient"]
