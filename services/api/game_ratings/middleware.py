"""Request middleware.

Registered in create_app so they run in this order, outermost first:
1. RequestLoggingMiddleware - logs every request URI
2. AuthenticationMiddleware - rejects unauthenticated requests with 403
3. ContentTypeMiddleware - marks every response as JSON
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from game_ratings.schemas import error_response
from game_ratings.services.auth import AuthenticationError, VerifierClient

logger = logging.getLogger("uvicorn.error")

JSON_CONTENT_TYPE = "application/json"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log the method and URI of every request, including rejected ones."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        uri = request.url.path
        if request.url.query:
            uri = f"{uri}?{request.url.query}"
        logger.info(f"{request.method} {uri}")
        return await call_next(request)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Authenticate the Authorization header against the verifier.

    On success the User is stored on `request.state.user` for the
    `get_current_user` dependency. On failure the request stops here.
    """

    def __init__(self, app: ASGIApp, authenticator: VerifierClient):
        super().__init__(app)
        self.authenticator = authenticator

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = request.headers.get("Authorization")
        try:
            user = await self.authenticator.authenticate(token)
        except AuthenticationError:
            return error_response(403, "FORBIDDEN", "Forbidden")

        request.state.user = user
        return await call_next(request)


class ContentTypeMiddleware(BaseHTTPMiddleware):
    """Set Content-Type: application/json on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["Content-Type"] = JSON_CONTENT_TYPE
        return response
