"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "MeetSync"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Room store
    transcript_cap: int = Field(
        default=2000,
        ge=1,
        description="Maximum transcript entries retained per room",
    )

    # Periodic minutes generation
    mom_scheduler_enabled: bool = Field(default=True)
    mom_interval_seconds: float = Field(
        default=25.0,
        gt=0,
        description="Seconds between scans for rooms with new transcripts",
    )

    # Summarization
    summarizer_backend: Literal["builtin", "llm"] = Field(
        default="builtin",
        description="builtin = rule-based generator, llm = Anthropic summarizer",
    )
    summarizer_timeout_seconds: float = Field(default=20.0, gt=0)

    # Anthropic (LLM summarizer)
    anthropic_api_key: str | None = Field(default=None)
    anthropic_model: str = Field(default="claude-sonnet-4-5")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
