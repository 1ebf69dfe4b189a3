"""Configuration models for TagSeek."""

from .config import LOCAL_CONFIG_NAME, Config
from .extraction_config import ExtractionConfig
from .llm_config import LLMConfig
from .search_config import ClassifierConfig, SearchConfig

__all__ = [
    "ClassifierConfig",
    "Config",
    "ExtractionConfig",
    "LLMConfig",
    "LOCAL_CONFIG_NAME",
    "SearchConfig",
]
