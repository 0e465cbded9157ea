"""
Configuration settings for the application.
"""
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Load environment variables from the backend/.env file if it exists
env_path = Path(__file__).resolve().parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.debug(f"Loaded .env from: {env_path}")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """
    # API configuration
    API_PORT: int = Field(default=7780)
    API_HOST: str = Field(default="0.0.0.0")
    LOG_LEVEL: str = Field(default="INFO")

    # Database configuration (used when DATABASE_URL is not set)
    DB_HOST: str = Field(default="localhost")
    DB_PORT: str = Field(default="5432")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="")
    DB_NAME: str = Field(default="medlink")

    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    # Connection pool
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_TIMEOUT: int = Field(default=30)
    DB_POOL_RECYCLE: int = Field(default=1800)

    # Store guard
    STORE_PROBE_TABLE: str = Field(default="profiles")
    STORE_REPROBE_SECONDS: float = Field(default=30.0, ge=0)
    STORE_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)

    # Paging and suggestions
    DEFAULT_PAGE_SIZE: int = Field(default=10, ge=1)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1)
    DEFAULT_SUGGESTION_LIMIT: int = Field(default=10, ge=1)

    # CORS configuration
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*")

    @field_validator("DATABASE_URL", mode="before")
    def assemble_database_url(cls, v: Optional[str], info: Any) -> str:
        """
        Normalise DATABASE_URL to the asyncpg driver, or assemble it from DB_* parts.
        """
        if v:
            # Hosted providers hand out postgres:// URLs
            if v.startswith("postgres://"):
                return v.replace("postgres://", "postgresql+asyncpg://", 1)
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            return v

        values = info.data
        user = values.get("DB_USER")
        password = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")

        return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        """
        Parse a comma-separated string into a list of CORS origins.
        """
        if isinstance(v, str) and v != "*":
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    class Config:
        """Config for the BaseSettings class."""
        env_file = ".env"
        case_sensitive = True
        extra = 'ignore'  # Ignore extra fields from environment


# Create settings object
settings = Settings()
