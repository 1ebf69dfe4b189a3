"""Command implementations for the TagSeek CLI."""
