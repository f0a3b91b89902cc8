"""Verifier client for request authentication.

The caller's Authorization header is forwarded unmodified to the verifier:
- 200 OK with a user JSON payload -> authenticated User
- anything else (other status, transport error, bad payload) -> AuthenticationError

The error is deliberately opaque; details only go to the server log.
"""

import logging

import httpx
from pydantic import ValidationError

from game_ratings.schemas import User
from game_ratings.settings import Settings

logger = logging.getLogger("uvicorn.error")


class AuthenticationError(RuntimeError):
    pass


class VerifierClient:
    """Client for the external authentication verifier."""

    def __init__(
        self,
        verifier_uri: str,
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize client with the verifier endpoint."""
        self.verifier_uri = verifier_uri
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "VerifierClient":
        return cls(settings.verifier_uri, timeout=settings.verifier_timeout)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def authenticate(self, token: str | None) -> User:
        """Resolve the user behind `token` via the verifier.

        Args:
            token: Raw Authorization header value, or None if absent.

        Returns:
            The authenticated user.

        Raises:
            AuthenticationError: For any verifier-side failure.
        """
        headers = {"Authorization": token} if token is not None else {}

        client = await self._get_client()
        try:
            response = await client.get(self.verifier_uri, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.warning(
                f"Error reading authentication response from {self.verifier_uri} "
                f"for token {token!r}: {e!r}"
            )
            raise AuthenticationError("Authentication failed") from e

        if response.status_code != 200:
            logger.info(
                f"Authentication failed with token {token!r} "
                f"(verifier {self.verifier_uri} returned {response.status_code})"
            )
            raise AuthenticationError("Authentication failed")

        try:
            user = User.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(
                f"Error decoding authentication response JSON from {self.verifier_uri} "
                f"for token {token!r}: {e}"
            )
            raise AuthenticationError("Authentication failed") from e

        logger.info(f"Authentication passed with token {token!r} for user {user.id}")
        return user
