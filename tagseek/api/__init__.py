"""User-facing entry points for TagSeek."""
