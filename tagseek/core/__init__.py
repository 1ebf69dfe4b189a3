"""Core models, configuration and errors for TagSeek."""
