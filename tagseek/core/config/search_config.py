"""Search loop and classifier configuration for TagSeek."""

import argparse
from typing import Any

from pydantic import BaseModel, Field, model_validator


class SearchConfig(BaseModel):
    """Configuration for the tool-calling search loop and catalog slicing."""

    max_turns: int | None = Field(
        default=25,
        ge=1,
        description="Maximum agent turns before giving up (None for no limit)",
    )

    result_max_tokens: int = Field(
        default=6000,
        ge=100,
        description="Token budget for a search result shown to the agent",
    )

    slice_max_tokens: int = Field(
        default=8000,
        ge=1,
        description="Token ceiling for each catalog slice",
    )

    encoding: str | None = Field(
        default=None,
        description="tiktoken encoding name (default: the model's encoding)",
    )

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add search-related CLI arguments."""
        parser.add_argument(
            "--max-turns",
            type=int,
            help="Maximum agent turns before the search is aborted (default: 25)",
        )
        parser.add_argument(
            "--max-tokens",
            type=int,
            help="Token ceiling per catalog slice (default: 8000)",
        )

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "max_turns", None):
            overrides["max_turns"] = args.max_turns
        if getattr(args, "max_tokens", None):
            overrides["slice_max_tokens"] = args.max_tokens
        if getattr(args, "encoding", None):
            overrides["encoding"] = args.encoding
        return overrides


class ClassifierConfig(BaseModel):
    """Configuration for per-record semantic classification."""

    max_attempts: int | None = Field(
        default=5,
        ge=1,
        description="Answers requested per record before giving up (None for no limit)",
    )

    max_concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Maximum in-flight classification requests (None for unbounded)",
    )

    initial_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    temperature_step: float = Field(
        default=0.2, ge=0.0, description="Temperature increase per repair attempt"
    )
    max_temperature: float = Field(default=1.0, ge=0.0, le=2.0)

    @model_validator(mode="after")
    def validate_temperatures(self) -> "ClassifierConfig":
        if self.initial_temperature > self.max_temperature:
            raise ValueError("initial_temperature cannot exceed max_temperature")
        return self

    def temperature_for(self, attempt: int) -> float:
        """Sampling temperature for the given 1-based attempt."""
        raised = self.initial_temperature + self.temperature_step * (attempt - 1)
        return min(raised, self.max_temperature)

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--max-attempts",
            type=int,
            help="Answers requested per record before it is marked failed (default: 5)",
        )
        parser.add_argument(
            "--max-concurrency",
            type=int,
            help="Maximum concurrent classification requests (default: unbounded)",
        )

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "max_attempts", None):
            overrides["max_attempts"] = args.max_attempts
        if getattr(args, "max_concurrency", None):
            overrides["max_concurrency"] = args.max_concurrency
        return overrides
