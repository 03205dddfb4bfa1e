"""Application configuration using pydantic-settings."""

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Gym API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_prefix: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Environment (local or production)
    environment: str = "local"

    # SQLite file used in local environment
    sqlite_path: str = "./database.sqlite"

    # Database settings (PostgreSQL - only used in production)
    db_host: str = ""
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "gym_db"
    db_echo: bool = False

    # Database pool settings
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_pre_ping: bool = True

    # Create missing tables on startup (existing tables are left untouched)
    db_auto_create: bool = True

    @computed_field
    @property
    def database_url(self) -> str:
        """
        Build database URL based on environment.

        Returns:
            - SQLite (aiosqlite) for local development
            - PostgreSQL (asyncpg) for production

        Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
        """
        env = self.environment.lower()

        if env == "local":
            return f"sqlite+aiosqlite:///{self.sqlite_path}"

        if not self.db_host:
            raise ValueError("DB_HOST is required when ENVIRONMENT is production")

        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return self.environment.lower() == "local"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
