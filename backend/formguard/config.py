"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Rules
    RULESET_PATH: str = ""
    RULE_SETS: list[str] = ["core", "additional"]
    MESSAGES_PATH: str = ""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FORMGUARD_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
