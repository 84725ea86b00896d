"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # GitHub (issue tracker that receives feedback)
    github_token: str = ""
    github_owner: str = "PawFighters"
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 15.0

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
