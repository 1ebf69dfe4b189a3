"""Argument parsers for the TagSeek CLI."""

import argparse
from pathlib import Path
from typing import Any

from tagseek.core.config.llm_config import LLMConfig
from tagseek.version import __version__


def create_main_parser() -> argparse.ArgumentParser:
    """Top-level parser with global flags."""
    parser = argparse.ArgumentParser(
        prog="tagseek",
        description="Find code in large repositories with a language model and ctags",
    )
    parser.add_argument(
        "--version", action="version", version=f"tagseek {__version__}"
    )
    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> Any:
    return parser.add_subparsers(dest="command", help="Available commands")


def add_common_arguments(parser: argparse.ArgumentParser, llm: bool = True) -> None:
    """Arguments shared by every command."""
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="Repository to search (default: configured repo_location or current directory)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Configuration file path",
    )
    parser.add_argument(
        "--summary",
        help="Short project description used to pick build directories to skip",
    )
    if llm:
        LLMConfig.add_cli_arguments(parser)
