"""Configuration management using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUPERPROMPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Model provider
    llm_provider: Literal["openai", "google"] = Field(
        default="openai",
        description="Chat model provider: openai or google",
    )

    # OpenAI configuration
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "SUPERPROMPT_OPENAI_API_KEY"),
        description="OpenAI API key (accepts OPENAI_API_KEY or SUPERPROMPT_OPENAI_API_KEY)",
    )
    openai_model: str = Field(
        default="gpt-4o",
        description="OpenAI model used for classification, analysis and generation",
    )

    # Google Gemini configuration
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY", "SUPERPROMPT_GOOGLE_API_KEY"),
        description="Gemini API key (accepts GEMINI_API_KEY, GOOGLE_API_KEY or SUPERPROMPT_GOOGLE_API_KEY)",
    )
    gemini_model: str = Field(
        default="gemini-2.5-pro",
        description="Gemini model used when llm_provider is google",
    )

    # Sampling parameters shared by every preset
    top_p: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Nucleus sampling width",
    )
    top_k: int = Field(
        default=40,
        ge=1,
        le=100,
        description="Token diversity cap (ignored by providers without top-k)",
    )

    # Storage
    db_path: str = Field(
        default="superprompt.sqlite3",
        description="Path to SQLite database file",
    )
    default_bucket_name: str = Field(
        default="Personal",
        description="Name of the bucket created for users who have none",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    log_json: bool = Field(
        default=False,
        description="Output logs as JSON (for production)",
    )


def get_settings() -> Settings:
    """Load and return application settings."""
    return Settings()
