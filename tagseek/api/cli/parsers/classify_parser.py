"""Classify command argument parser for TagSeek CLI."""

import argparse
from typing import Any, cast

from tagseek.core.config.extraction_config import ExtractionConfig
from tagseek.core.config.search_config import ClassifierConfig

from . import add_common_arguments


def add_classify_subparser(subparsers: Any) -> argparse.ArgumentParser:
    """Add classify command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured classify subparser
    """
    classify_parser = subparsers.add_parser(
        "classify",
        help="Keep the tags for which a natural-language predicate holds",
        description="Ask the model about every tag concurrently",
    )
    classify_parser.add_argument("predicate", help="Condition each tag is tested against")
    add_common_arguments(classify_parser)
    classify_parser.add_argument(
        "--kind", help="Only classify tags whose kind contains this text"
    )
    classify_parser.add_argument(
        "--name", help="Only classify tags whose name contains this text"
    )
    classify_parser.add_argument(
        "--no-blacklist",
        action="store_true",
        help="Do not ask the model which root entries to exclude",
    )

    ClassifierConfig.add_cli_arguments(classify_parser)
    ExtractionConfig.add_cli_arguments(classify_parser)

    return cast(argparse.ArgumentParser, classify_parser)


__all__: list[str] = ["add_classify_subparser"]
