"""FastAPI application entry point.

Game Ratings API - per-user game ratings and per-game averages.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from game_ratings.middleware import (
    AuthenticationMiddleware,
    ContentTypeMiddleware,
    RequestLoggingMiddleware,
)
from game_ratings.routes import api_router
from game_ratings.schemas import error_response
from game_ratings.services.auth import VerifierClient
from game_ratings.settings import Settings, get_settings
from game_ratings.stores import RatingRepository
from game_ratings.stores.postgres import SqlRatingRepository

logger = logging.getLogger("uvicorn.error")

ERROR_CODES = {
    400: "INVALID_RATING",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    500: "INTERNAL_ERROR",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    The store must be reachable before any request is served, so an
    initialization failure aborts startup.
    """
    # Startup
    repository: RatingRepository = app.state.repository
    await repository.initialize()

    yield

    # Shutdown
    await app.state.authenticator.close()
    await repository.close()


def create_app(
    settings: Settings | None = None,
    *,
    repository: RatingRepository | None = None,
    authenticator: VerifierClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if omitted.
        repository: Rating store; a SqlRatingRepository built from settings if omitted.
        authenticator: Verifier client; built from settings if omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Game ratings API",
        lifespan=lifespan,
        # The root path space belongs to game ids.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.repository = repository or SqlRatingRepository.from_settings(settings)
    app.state.authenticator = authenticator or VerifierClient.from_settings(settings)

    # Added last = runs first: logging -> authentication -> content type
    app.add_middleware(ContentTypeMiddleware)
    app.add_middleware(AuthenticationMiddleware, authenticator=app.state.authenticator)
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """HTTP errors in the structured error format."""
        code = getattr(exc, "code", None) or ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        return error_response(exc.status_code, code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies are a 400, not FastAPI's default 422."""
        return error_response(400, "INVALID_RATING", "Request body must be {\"rating\": <integer>}")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error for {request.url.path}")
        return error_response(500, "INTERNAL_ERROR", "Internal server error")

    app.include_router(api_router)

    return app


def main() -> None:
    """Load settings and serve the application with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as e:
        missing = ", ".join(
            str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")
        )
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid or missing configuration: {missing}")
        sys.exit(1)

    uvicorn.run(
        "game_ratings.main:create_app",
        factory=True,
        host=settings.bind_host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
