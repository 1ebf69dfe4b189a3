"""
LLM configuration for TagSeek agents.

This module provides a type-safe, validated configuration system for the
language-model service with support for multiple configuration sources
(environment variables, config files, CLI arguments).
"""

import argparse
import os
from typing import Any, Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMConfig(BaseSettings):
    """
    LLM configuration for TagSeek.

    Configuration Sources (in order of precedence):
    1. CLI arguments
    2. Environment variables (TAGSEEK_LLM_*)
    3. Config files
    4. Default values

    Environment Variables:
        TAGSEEK_LLM_API_KEY=sk-...      (OPENAI_API_KEY is also honored)
        TAGSEEK_LLM_MODEL=gpt-4-1106-preview
        TAGSEEK_LLM_BASE_URL=https://api.openai.com/v1
        TAGSEEK_LLM_TEMPERATURE=0.0
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGSEEK_LLM_",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore unknown fields for forward compatibility
    )

    provider: Literal["openai"] = Field(
        default="openai", description="LLM provider (only openai is supported)"
    )

    model: str = Field(
        default="gpt-4-1106-preview",
        description="Chat model used by the finder, classifier and blacklist agents",
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "api_key", "TAGSEEK_LLM_API_KEY", "OPENAI_API_KEY"
        ),
        description="API key for authentication",
    )

    base_url: str | None = Field(default=None, description="Base URL for the LLM API")

    temperature: float = Field(
        default=0.0, ge=0.0, le=2.0, description="Sampling temperature for agents"
    )

    # Internal settings
    timeout: int = Field(default=60, description="Internal timeout for LLM calls")
    max_retries: int = Field(
        default=3, ge=0, description="Transport retries with exponential backoff"
    )

    @field_validator("base_url")
    def validate_base_url(cls, v: str | None) -> str | None:  # noqa: N805
        """Validate and normalize base URL."""
        if v is None:
            return v

        v = v.rstrip("/")

        if not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError("base_url must start with http:// or https://")

        return v

    def get_provider_config(self) -> dict[str, Any]:
        """Keyword arguments for the provider constructor."""
        config: dict[str, Any] = {
            "model": self.model,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }
        if self.api_key:
            config["api_key"] = self.api_key.get_secret_value()
        if self.base_url:
            config["base_url"] = self.base_url
        return config

    def is_provider_configured(self) -> bool:
        return self.api_key is not None

    def get_missing_config(self) -> list[str]:
        """
        Get list of missing required configuration.

        Returns:
            List of missing configuration parameter names
        """
        missing = []

        if not self.api_key:
            missing.append("api_key (set TAGSEEK_LLM_API_KEY or OPENAI_API_KEY)")

        return missing

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add LLM-related CLI arguments."""
        parser.add_argument(
            "--llm-model",
            help="Chat model for the agents (default: gpt-4-1106-preview)",
        )

        parser.add_argument(
            "--llm-api-key",
            help="API key for LLM provider (uses env var if not specified)",
        )

        parser.add_argument(
            "--llm-base-url",
            help="Base URL for LLM API (uses env var if not specified)",
        )

        parser.add_argument(
            "--llm-temperature",
            type=float,
            help="Sampling temperature (default: 0.0)",
        )

    @classmethod
    def load_from_env(cls) -> dict[str, Any]:
        """Load LLM config from environment variables."""
        config: dict[str, Any] = {}

        if api_key := (
            os.getenv("TAGSEEK_LLM_API_KEY") or os.getenv("OPENAI_API_KEY")
        ):
            config["api_key"] = api_key
        if base_url := os.getenv("TAGSEEK_LLM_BASE_URL"):
            config["base_url"] = base_url
        if model := os.getenv("TAGSEEK_LLM_MODEL"):
            config["model"] = model
        if temperature := os.getenv("TAGSEEK_LLM_TEMPERATURE"):
            config["temperature"] = float(temperature)

        return config

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        """Extract LLM config from CLI arguments."""
        overrides: dict[str, Any] = {}

        if hasattr(args, "llm_model") and args.llm_model:
            overrides["model"] = args.llm_model
        if hasattr(args, "llm_api_key") and args.llm_api_key:
            overrides["api_key"] = args.llm_api_key
        if hasattr(args, "llm_base_url") and args.llm_base_url:
            overrides["base_url"] = args.llm_base_url
        if getattr(args, "llm_temperature", None) is not None:
            overrides["temperature"] = args.llm_temperature

        return overrides

    def __repr__(self) -> str:
        """String representation hiding sensitive information."""
        api_key_display = "***" if self.api_key else None
        return (
            f"LLMConfig("
            f"provider={self.provider}, "
            f"model={self.model}, "
            f"api_key={api_key_display}, "
            f"base_url={self.base_url})"
        )
