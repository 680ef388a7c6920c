"""Configuration management using Pydantic Settings."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from structai.llm import DEFAULT_MODEL
from structai.orchestration.result import CallOptions

# XDG config directory for user configuration
XDG_CONFIG_PATH = Path.home() / ".config" / "structai"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=[
            XDG_CONFIG_PATH / "config.env",  # User config (lower priority)
            ".env",  # Project .env (higher priority)
        ],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Provider
    anthropic_api_key: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "LLM_API_KEY"),
        description="API key for the Anthropic Messages API",
    )
    anthropic_base_url: str | None = Field(
        default=None,
        description="Override for the Anthropic API base URL",
    )

    # Call defaults
    llm_model: str = Field(default=DEFAULT_MODEL, min_length=1, description="Model name")
    llm_max_tokens: int = Field(default=4096, gt=0, description="Max output tokens per call")
    llm_temperature: float = Field(default=0.2, ge=0.0, le=1.0, description="Sampling temperature")
    llm_timeout_seconds: float = Field(default=60.0, gt=0, description="Provider request timeout")

    # Prompts
    prompts_dir: Path | None = Field(
        default=None,
        description="Directory with prompt templates (defaults to packaged templates)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    def call_options(self) -> CallOptions:
        """Build call options from configured defaults."""
        return CallOptions(
            model=self.llm_model,
            max_tokens=self.llm_max_tokens,
            temperature=self.llm_temperature,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
