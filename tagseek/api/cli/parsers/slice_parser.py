"""Slice command argument parser for TagSeek CLI."""

import argparse
from typing import Any, cast

from tagseek.core.config.extraction_config import ExtractionConfig
from tagseek.core.config.search_config import SearchConfig

from . import add_common_arguments


def add_slice_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add slice command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured slice subparser
    """
    slice_parser = subparsers.add_parser(
        "slice",
        help="Split the tag catalog into context-window-sized slices",
        description="Partition the catalog into token-bounded groups",
    )
    add_common_arguments(slice_parser, llm=False)
    slice_parser.add_argument(
        "--encoding",
        help="tiktoken encoding (default: the configured model's encoding)",
    )

    SearchConfig.add_cli_arguments(slice_parser)
    ExtractionConfig.add_cli_arguments(slice_parser)

    return cast(argparse.ArgumentParser, slice_parser)


__all__: list[str] = ["add_slice_subparser"]
