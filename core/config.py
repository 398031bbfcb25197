"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    DATABASE_URL: str = "sqlite:///data/store.db"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Export Configuration
    EXPORT_NULL_VALUE: str = "[null]"
    EXPORT_TABLE_PREFIX: str = "class_"
    EXPORT_DATE_FORMAT: Optional[str] = None  # strftime pattern, None = locale long date+time
    EXPORT_STRICT_SCHEMA: bool = True
    EXPORT_OUTPUT_PATH: str = "export.json"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
