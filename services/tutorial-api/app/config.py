"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings

from common.database.registry import resolve_mongo_uri


class Settings(BaseSettings):
    """Application settings, read from environment variables and .env."""

    # Application
    app_name: str = "tutorial-api"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # MongoDB - MONGO_URI as given; unset or empty falls back to a local development database
    mongo_uri: Optional[str] = None

    # CORS - comma-separated list of allowed origins
    cors_origins: str = "http://localhost:8081"

    @property
    def uses_default_mongo_uri(self) -> bool:
        """True when MONGO_URI was not provided and the fallback is taken."""
        return not self.mongo_uri

    @property
    def mongo_url(self) -> str:
        return resolve_mongo_uri(self.mongo_uri)

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
