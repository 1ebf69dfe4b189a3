"""Command-line interface for TagSeek."""
