"""Project root detection and root directory listing."""

from pathlib import Path

from loguru import logger

PROJECT_MARKERS = (".git", ".tagseek.json")


def find_project_root(start_path: Path | None = None) -> Path:
    """Nearest ancestor of ``start_path`` containing a project marker.

    Falls back to ``start_path`` itself (or the current directory) when no
    ancestor has one.
    """
    start = (start_path or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return start


def list_root_entries(root: Path) -> list[str]:
    """Names of the entries directly under ``root``, sorted."""
    entries = sorted(entry.name for entry in root.iterdir())
    logger.trace(f"root entries: {entries}")
    return entries
