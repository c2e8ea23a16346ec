"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database: DATABASE_URL wins, otherwise the URL is assembled from DB_* parts
    DATABASE_URL: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "subtracker"
    DB_PASSWORD: str = "subtracker_password_change_me"
    DB_NAME: str = "subscriptions"

    # Upper bound for a single statement, milliseconds (0 = no limit)
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    DB_CONNECT_TIMEOUT: int = 5
    DB_AUTO_CREATE: bool = True

    # Application
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    DEFAULT_PAGE_LIMIT: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to SQLAlchemy format (postgresql+psycopg://)
        """
        url = self.DATABASE_URL or (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
