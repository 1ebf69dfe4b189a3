"""Version information for TagSeek."""

__version__ = "0.3.0"
