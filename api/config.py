"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default cross-origin relay; {url} receives the percent-encoded target address
DEFAULT_RELAY_URL = "https://api.allorigins.win/raw?url={url}"
RELAY_PLACEHOLDER = "{url}"


class Settings(BaseSettings):
    """Settings read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # HTTP surface
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Retrieval relays, tried in order until one answers 2xx
    relay_urls: list[str] = Field(default_factory=lambda: [DEFAULT_RELAY_URL])
    fetch_timeout_seconds: float = Field(30.0, gt=0)  # per relay request
    fetch_user_agent: str = "WebsiteBenchmark/1.0"

    # Deadline for the whole fetch when an HTTP caller gives none
    analysis_timeout_seconds: float | None = Field(60.0, gt=0)

    @field_validator("relay_urls")
    @classmethod
    def _relay_templates_have_placeholder(cls, value: list[str]) -> list[str]:
        for template in value:
            if RELAY_PLACEHOLDER not in template:
                raise ValueError(f"Relay URL {template!r} has no {RELAY_PLACEHOLDER} placeholder")
        return value

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def is_test(self) -> bool:
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
