"""Search command argument parser for TagSeek CLI."""

import argparse
from typing import Any, cast

from tagseek.core.config.extraction_config import ExtractionConfig
from tagseek.core.config.search_config import SearchConfig

from . import add_common_arguments


def add_search_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add search command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured search subparser
    """
    search_parser = subparsers.add_parser(
        "search",
        help="Let the model find the files matching a description",
        description="Run the tool-calling finder agent over the repository's tags",
    )
    search_parser.add_argument("query", help="What to look for")
    add_common_arguments(search_parser)
    search_parser.add_argument(
        "--no-blacklist",
        action="store_true",
        help="Do not ask the model which root entries to exclude",
    )
    search_parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Do not stream the agent's messages",
    )

    SearchConfig.add_cli_arguments(search_parser)
    ExtractionConfig.add_cli_arguments(search_parser)

    return cast(argparse.ArgumentParser, search_parser)


__all__: list[str] = ["add_search_subparser"]
