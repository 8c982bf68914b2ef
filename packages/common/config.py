from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Strongly-typed settings model loaded from env / .env.

    Notes:
        - `ANSWER_MODE` selects how multiple-choice submissions are resolved.
          `id` is the canonical contract; `text` exists for legacy callers.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        protected_namespaces=()
    )

    ENV: str = Field(default="dev", description="Deployment environment, e.g. dev/staging/prod")
    SERVICE_NAME: str = Field(default="assessment", description="Service name")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    ANSWER_MODE: Literal["id", "text"] = Field(
        default="id", description="Representation of submitted multiple-choice answers"
    )


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance."""
    return Settings()
