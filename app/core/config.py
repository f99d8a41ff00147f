"""
Core configuration settings for the train running board.
"""
from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database settings
    database_url: str = "sqlite:///./trains.db"

    # API settings
    api_v1_prefix: str = "/api"
    project_name: str = "Train Running Board"
    version: str = "0.1.0"

    debug: bool = False
    log_level: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
