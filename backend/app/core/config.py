from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Reading Queue"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:8081,http://localhost:19006"  # Comma-separated list

    # Database
    DATABASE_URL: str = "sqlite:///./readqueue.db"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def expand_sqlite_home(cls, v: str) -> str:
        """Allow ``sqlite:///~/...`` paths in .env files."""
        if v and v.startswith("sqlite:///~"):
            return "sqlite:///" + str(Path(v[len("sqlite:///") :]).expanduser())
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
