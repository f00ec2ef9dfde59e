"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from PLASMA_* environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json", pattern="^(json|console)$", description="Logging format (json or console)"
    )

    # Map Generation Configuration
    default_map_width: int = Field(default=256, ge=0, description="Default terrain width")
    default_map_height: int = Field(default=256, ge=0, description="Default terrain height")
    seed: Optional[str] = Field(default=None, description="Seed for reproducible terrain")

    class Config:
        env_prefix = "PLASMA_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
