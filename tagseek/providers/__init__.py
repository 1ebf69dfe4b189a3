"""Provider implementations for external services."""
