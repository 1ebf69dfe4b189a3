"""Symbol extraction from source trees."""

from .ctags import CtagsExtractor

__all__ = ["CtagsExtractor"]
