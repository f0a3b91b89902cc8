"""Application settings via Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Built once at startup and handed to the components that need it
    (store, verifier client). Business logic never reads the environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    app_name: str = "Game Ratings API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = ""
    port: int = 8000

    # Authentication (external verifier)
    verifier_uri: str = Field(min_length=1)
    verifier_timeout: float = Field(default=5.0, gt=0)

    # Store
    database_url: str = Field(
        min_length=1,
        validation_alias=AliasChoices("DATABASE_URL", "DATABASE_CONNECTION_STRING"),
    )
    database_name: str = Field(min_length=1)
    ratings_table: str = Field(
        min_length=1,
        validation_alias=AliasChoices("RATINGS_TABLE", "RATINGS_TABLE_NAME"),
    )
    database_connect_timeout: float = Field(default=5.0, gt=0)

    @property
    def async_database_url(self) -> str:
        """Get database URL with asyncpg driver, bound to `database_name`.

        Plain postgresql:// URLs are upgraded to postgresql+asyncpg://.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return make_url(url).set(database=self.database_name).render_as_string(
            hide_password=False
        )

    @property
    def bind_host(self) -> str:
        """Host passed to the server; empty means all interfaces."""
        return self.host or "0.0.0.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
