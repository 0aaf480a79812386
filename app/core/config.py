# app/core/config.py
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Database (.env):
      - DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME, DB_SSLMODE
      - DATABASE_URL (optional, overrides the DB_* parts when set)

    Process:
      - HOST / PORT: where uvicorn listens
      - LOG_LEVEL / LOG_FILE: see app/core/logging_config.py
      - RUN_MIGRATIONS: apply Alembic migrations on startup
    """

    PROJECT_NAME: str = "Catalog Service"
    API_V1_STR: str = "/api/v1"

    # Database
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "catalog"
    DB_SSLMODE: str = "disable"
    DATABASE_URL: str | None = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 50051

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    RUN_MIGRATIONS: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy URL for the catalog database.

        DATABASE_URL wins when present; otherwise the URL is assembled from
        the DB_* parts with sslmode appended.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        password = quote_plus(self.DB_PASSWORD)
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?sslmode={self.DB_SSLMODE}"
        )


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
