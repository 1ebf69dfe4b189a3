"""Symbol extraction configuration for TagSeek.

Controls how Universal Ctags is invoked: which parsers run, how developer
note comments are turned into tags, and which paths are always skipped.
"""

import argparse
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_LANGUAGES = [
    "Rust",
    "C",
    "C++",
    "C#",
    "Java",
    "JavaScript",
    "Python",
    "Ruby",
    "Go",
    "Kotlin",
    "TypeScript",
    "Elixir",
    "Erlang",
    "Haskell",
    "Lua",
    "Perl",
    "PHP",
    "PowerShell",
    "SQL",
    "Sh",
    "Tcl",
    "Asm",
    "D",
    "Fortran",
    "Cobol",
    "HTML",
    "CSS",
    "JavaProperties",
]


class ExtractionConfig(BaseModel):
    """Configuration for the ctags symbol extraction step."""

    ctags_path: str = Field(default="ctags", description="ctags executable")

    languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="ctags parsers to enable",
    )

    note_marker: str = Field(
        default="DEV:",
        description="Comment prefix that turns a comment into a note tag",
    )

    note_kind: str = Field(
        default="devnote", description="Kind name given to note tags"
    )

    note_kind_letter: str = Field(
        default="d", description="Single-letter ctags kind for note tags"
    )

    exclude: list[str] = Field(
        default_factory=list,
        description="Paths or globs always passed to ctags as --exclude",
    )

    timeout: float | None = Field(
        default=None, gt=0, description="Seconds before ctags is killed"
    )

    @field_validator("note_kind_letter")
    def validate_kind_letter(cls, v: str) -> str:  # noqa: N805
        if len(v) != 1 or not v.isalpha():
            raise ValueError("note_kind_letter must be a single letter")
        return v

    @field_validator("note_kind")
    def validate_note_kind(cls, v: str) -> str:  # noqa: N805
        if not v or not all(c.isalnum() or c in "-_" for c in v):
            raise ValueError(f"Invalid note kind: {v!r}")
        return v

    @classmethod
    def add_cli_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--ctags",
            dest="ctags_path",
            help="Path to the ctags executable (default: ctags)",
        )
        parser.add_argument(
            "--exclude",
            action="append",
            help="Path or glob to exclude from extraction (repeatable)",
        )

    @classmethod
    def extract_cli_overrides(cls, args: Any) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if getattr(args, "ctags_path", None):
            overrides["ctags_path"] = args.ctags_path
        if getattr(args, "exclude", None):
            overrides["exclude"] = list(args.exclude)
        return overrides
