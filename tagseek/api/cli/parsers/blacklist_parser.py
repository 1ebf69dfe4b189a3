"""Blacklist command argument parser for TagSeek CLI."""

import argparse
from typing import Any, cast

from . import add_common_arguments


def add_blacklist_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add blacklist command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured blacklist subparser
    """
    blacklist_parser = subparsers.add_parser(
        "blacklist",
        help="Show which root entries the model considers build output",
        description="Ask the model which root directory entries hold no source code",
    )
    add_common_arguments(blacklist_parser)

    return cast(argparse.ArgumentParser, blacklist_parser)


__all__: list[str] = ["add_blacklist_subparser"]
