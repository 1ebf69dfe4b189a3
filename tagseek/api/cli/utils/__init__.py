"""Utility helpers for the TagSeek CLI."""

from .rich_output import RichOutputFormatter

__all__ = ["RichOutputFormatter"]
