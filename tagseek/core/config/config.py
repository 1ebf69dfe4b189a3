"""Centralized configuration management for TagSeek.

This module provides a unified configuration system with clear precedence:
1. CLI arguments (highest priority)
2. Environment variables
3. Local .tagseek.json in target directory (if present)
4. Config file (via --config path)
5. Default values (lowest priority)

The configuration is built once at process start by the CLI and passed
explicitly to the services that need it; there is no module-level instance.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tagseek.core.exceptions import ConfigurationError

from .extraction_config import ExtractionConfig
from .llm_config import LLMConfig
from .search_config import ClassifierConfig, SearchConfig

LOCAL_CONFIG_NAME = ".tagseek.json"

_TRUE_VALUES = ("true", "1", "yes")


class Config(BaseModel):
    """Centralized configuration for TagSeek."""

    model_config = ConfigDict(validate_assignment=True)

    repo_location: Path | None = Field(
        default=None, description="Root of the repository to search"
    )
    project_summary: str = Field(
        default="",
        description="Short description of the project, used for the blacklist prompt",
    )
    llm: LLMConfig = Field(default_factory=LLMConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    debug: bool = Field(default=False)

    def __init__(
        self,
        config_file: Path | None = None,
        overrides: dict[str, Any] | None = None,
        target_dir: Path | None = None,
        **kwargs: Any,
    ):
        """Initialize configuration with hierarchical loading.

        Args:
            config_file: Optional path to configuration file (from --config)
            overrides: Optional dictionary of CLI overrides
            target_dir: Optional target directory to check for .tagseek.json
            **kwargs: Additional keyword arguments
        """
        config_data: dict[str, Any] = {}

        env_vars = self._load_env_vars()
        config_data.update(copy.deepcopy(env_vars))

        # File values never beat environment variables, so env is re-applied
        # after every file merge
        if config_file is not None:
            if not config_file.exists():
                raise ValueError(f"Config file not found: {config_file}")
            self._deep_merge(config_data, self._read_json(config_file))
            self._deep_merge(config_data, copy.deepcopy(env_vars))

        if target_dir is not None and target_dir.exists():
            local_config_path = target_dir / LOCAL_CONFIG_NAME
            if local_config_path.exists():
                self._deep_merge(config_data, self._read_json(local_config_path))
                self._deep_merge(config_data, copy.deepcopy(env_vars))

        if overrides:
            self._deep_merge(config_data, overrides)

        if kwargs:
            self._deep_merge(config_data, kwargs)

        # LLMConfig is a BaseSettings; build it explicitly so its own
        # environment handling runs
        if isinstance(config_data.get("llm"), dict):
            config_data["llm"] = LLMConfig(**config_data["llm"])

        super().__init__(**config_data)

    @staticmethod
    def _read_json(path: Path) -> dict[str, Any]:
        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in config file {path}: {e}. "
                "Please check the file format and try again."
            ) from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a JSON object")
        return data

    @staticmethod
    def _load_env_vars() -> dict[str, Any]:
        """Load configuration from environment variables.

        Uses TAGSEEK_ prefix with __ delimiter for nested values.
        """
        config: dict[str, Any] = {}

        if debug := os.getenv("TAGSEEK_DEBUG"):
            config["debug"] = debug.lower() in _TRUE_VALUES
        if repo_location := os.getenv("TAGSEEK_REPO_LOCATION"):
            config["repo_location"] = repo_location
        if summary := os.getenv("TAGSEEK_PROJECT_SUMMARY"):
            config["project_summary"] = summary

        if llm_config := LLMConfig.load_from_env():
            config["llm"] = llm_config

        search_config: dict[str, Any] = {}
        if max_turns := os.getenv("TAGSEEK_SEARCH__MAX_TURNS"):
            search_config["max_turns"] = int(max_turns)
        if result_tokens := os.getenv("TAGSEEK_SEARCH__RESULT_MAX_TOKENS"):
            search_config["result_max_tokens"] = int(result_tokens)
        if slice_tokens := os.getenv("TAGSEEK_SEARCH__SLICE_MAX_TOKENS"):
            search_config["slice_max_tokens"] = int(slice_tokens)
        if encoding := os.getenv("TAGSEEK_SEARCH__ENCODING"):
            search_config["encoding"] = encoding
        if search_config:
            config["search"] = search_config

        classifier_config: dict[str, Any] = {}
        if max_attempts := os.getenv("TAGSEEK_CLASSIFIER__MAX_ATTEMPTS"):
            classifier_config["max_attempts"] = int(max_attempts)
        if max_concurrency := os.getenv("TAGSEEK_CLASSIFIER__MAX_CONCURRENCY"):
            classifier_config["max_concurrency"] = int(max_concurrency)
        if classifier_config:
            config["classifier"] = classifier_config

        extraction_config: dict[str, Any] = {}
        if ctags_path := os.getenv("TAGSEEK_EXTRACTION__CTAGS_PATH"):
            extraction_config["ctags_path"] = ctags_path
        if exclude := os.getenv("TAGSEEK_EXTRACTION__EXCLUDE"):
            extraction_config["exclude"] = [p for p in exclude.split(",") if p]
        if extraction_config:
            config["extraction"] = extraction_config

        return config

    def _deep_merge(self, base: dict[str, Any], update: dict[str, Any]) -> None:
        """Deep merge update dictionary into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    @field_validator("repo_location")
    def resolve_repo_location(cls, v: Path | None) -> Path | None:  # noqa: N805
        if v is None:
            return v
        return v.expanduser().resolve()

    def require_repo_location(self) -> Path:
        """Return the repository root or fail with a helpful message."""
        if self.repo_location is None:
            raise ConfigurationError(
                "Repository location is not configured. Pass a path, set "
                f"TAGSEEK_REPO_LOCATION, or add repo_location to {LOCAL_CONFIG_NAME}."
            )
        if not self.repo_location.is_dir():
            raise ConfigurationError(
                f"Repository location is not a directory: {self.repo_location}"
            )
        return self.repo_location

    @classmethod
    def from_cli_args(
        cls,
        args: Any,
        config_file: Path | None = None,
        target_dir: Path | None = None,
    ) -> "Config":
        """Create configuration from CLI arguments.

        Args:
            args: Parsed command line arguments
            config_file: Optional config file path (from --config)
            target_dir: Optional target directory to check for .tagseek.json

        Returns:
            Configured Config instance
        """
        overrides: dict[str, Any] = {}

        if getattr(args, "path", None) is not None:
            overrides["repo_location"] = str(args.path)
        if getattr(args, "summary", None):
            overrides["project_summary"] = args.summary

        if llm_overrides := LLMConfig.extract_cli_overrides(args):
            overrides["llm"] = llm_overrides
        if search_overrides := SearchConfig.extract_cli_overrides(args):
            overrides["search"] = search_overrides
        if classifier_overrides := ClassifierConfig.extract_cli_overrides(args):
            overrides["classifier"] = classifier_overrides
        if extraction_overrides := ExtractionConfig.extract_cli_overrides(args):
            overrides["extraction"] = extraction_overrides

        if getattr(args, "debug", False) or getattr(args, "verbose", False):
            overrides["debug"] = True

        return cls(config_file=config_file, overrides=overrides, target_dir=target_dir)

    def get_missing_config(self) -> list[str]:
        """
        Get list of missing required configuration parameters.

        Returns:
            List of missing configuration parameter names
        """
        return [f"llm.{item}" for item in self.llm.get_missing_config()]

    def validate_for_command(self, command: str) -> list[str]:
        """
        Validate configuration for a specific command.

        Args:
            command: Command name ('search', 'classify', 'slice', 'blacklist')

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        # Slicing never talks to the model
        if command != "slice":
            errors.extend(
                f"Missing required configuration: {item}"
                for item in self.get_missing_config()
            )

        if self.repo_location is None:
            errors.append("Missing required configuration: repo_location")
        elif not self.repo_location.is_dir():
            errors.append(f"Repository location is not a directory: {self.repo_location}")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """
        Convert configuration to a JSON-compatible dictionary, without secrets.

        Returns:
            Configuration as dictionary
        """
        return self.model_dump(
            mode="json",
            exclude={"debug": True, "llm": {"api_key"}},
            exclude_none=True,
        )

    def save(self, path: Path) -> None:
        """Persist the configuration as JSON (API keys are never written)."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
            f.write("\n")
