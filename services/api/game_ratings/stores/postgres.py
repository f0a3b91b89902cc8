"""PostgreSQL rating store with async SQLAlchemy.

Handles:
- Connection pool lifecycle and startup liveness probe
- Average / single rating queries
- Upsert keyed on (game_id, user_id)
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import Insert, MetaData, Select, Table, func, select, text
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from game_ratings.models import build_ratings_table
from game_ratings.schemas import AvgRating, Rating
from game_ratings.settings import Settings
from game_ratings.stores.base import RatingRepository, RatingValidationError, RepositoryError

logger = logging.getLogger("uvicorn.error")


def avg_ratings_query(table: Table) -> Select:
    """Mean rating per game, highest first."""
    avg_rating = func.avg(table.c.rating).label("rating")
    return (
        select(table.c.game_id, avg_rating)
        .group_by(table.c.game_id)
        .order_by(avg_rating.desc())
    )


def upsert_rating_statement(table: Table, rating: Rating) -> Insert:
    """INSERT ... ON CONFLICT (game_id, user_id) DO UPDATE for one rating."""
    stmt = postgresql.insert(table).values(
        game_id=rating.game_id,
        user_id=rating.user_id,
        rating=rating.rating,
    )
    return stmt.on_conflict_do_update(
        index_elements=[table.c.game_id, table.c.user_id],
        set_={"rating": stmt.excluded.rating},
    )


class SqlRatingRepository(RatingRepository):
    """RatingRepository backed by a PostgreSQL table."""

    def __init__(
        self,
        database_url: str,
        table_name: str,
        connect_timeout: float = 5.0,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.connect_timeout = connect_timeout
        self.echo = echo
        self.metadata = MetaData()
        self.table = build_ratings_table(table_name, self.metadata)
        self._engine: AsyncEngine | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlRatingRepository":
        """Build a repository from application settings."""
        return cls(
            database_url=settings.async_database_url,
            table_name=settings.ratings_table,
            connect_timeout=settings.database_connect_timeout,
            echo=settings.debug,
        )

    async def initialize(self) -> None:
        """Create the connection pool, ping the database and ensure the table exists."""
        self._engine = create_async_engine(
            self.database_url,
            echo=self.echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
        safe_url = make_url(self.database_url).render_as_string(hide_password=True)

        try:
            await asyncio.wait_for(self._ping_and_bind(), timeout=self.connect_timeout)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Cannot connect to database {safe_url}: {e!r}")
            await self.close()
            raise RepositoryError("Cannot connect to database") from e

        logger.info(f"Successfully connected to {safe_url}, table={self.table.name}")

    async def _ping_and_bind(self) -> None:
        async with self._engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            # Not a migration: only creates the table when it is missing.
            await conn.run_sync(self.metadata.create_all)

    async def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None

    @asynccontextmanager
    async def _connection(self, action: str) -> AsyncGenerator[AsyncConnection, None]:
        """Transactional connection; store failures surface as RepositoryError.

        Usage:
            async with self._connection("retrieving ratings") as conn:
                result = await conn.execute(query)
        """
        if self._engine is None:
            raise RepositoryError("Database not initialized. Call initialize() first.")

        try:
            async with self._engine.begin() as conn:
                yield conn
        except (SQLAlchemyError, OSError) as e:
            logger.exception(f"Error {action}")
            raise RepositoryError(f"Error {action}") from e

    async def get_avg_ratings(self) -> list[AvgRating]:
        async with self._connection("retrieving ratings") as conn:
            result = await conn.execute(avg_ratings_query(self.table))
            rows = result.all()

        return [AvgRating(game_id=row.game_id, rating=float(row.rating)) for row in rows]

    async def get_rating(self, game_id: str, user_id: str) -> Rating:
        query = select(self.table.c.rating).where(
            self.table.c.game_id == game_id,
            self.table.c.user_id == user_id,
        )
        async with self._connection("retrieving rating") as conn:
            result = await conn.execute(query)
            value = result.scalar_one_or_none()

        if value is None:
            return Rating(game_id=game_id, user_id=user_id, rating=0)
        return Rating(game_id=game_id, user_id=user_id, rating=value)

    async def put_rating(self, rating: Rating) -> None:
        if not rating.is_valid():
            logger.warning(
                f"Invalid rating update: game_id={rating.game_id} "
                f"user_id={rating.user_id} rating={rating.rating!r}"
            )
            raise RatingValidationError("Rating must be an integer between 1 and 5")

        async with self._connection("updating rating") as conn:
            await conn.execute(upsert_rating_statement(self.table, rating))
