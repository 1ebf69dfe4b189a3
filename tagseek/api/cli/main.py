"""CLI entry point for TagSeek."""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from tagseek.core.config import Config
from tagseek.core.exceptions import TagSeekError
from tagseek.utils.project_detection import find_project_root


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Args:
        verbose: Whether to enable verbose logging
    """
    logger.remove()

    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
                "<level>{message}</level>"
            ),
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format=(
                "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<level>{message}</level>"
            ),
        )


def validate_args_and_config(args: argparse.Namespace) -> tuple[Config, list[str]]:
    """Build the configuration from CLI arguments and validate it.

    Args:
        args: Parsed arguments to validate

    Returns:
        tuple: (config, validation_errors)
    """
    target_dir = args.path if args.path is not None else find_project_root(Path.cwd())
    config = Config.from_cli_args(args, config_file=args.config, target_dir=target_dir)

    if config.repo_location is None:
        config.repo_location = target_dir

    return config, config.validate_for_command(args.command)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the complete argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    from .parsers import create_main_parser, setup_subparsers
    from .parsers.blacklist_parser import add_blacklist_subparser
    from .parsers.classify_parser import add_classify_subparser
    from .parsers.search_parser import add_search_subparser
    from .parsers.slice_parser import add_slice_subparser

    parser = create_main_parser()
    subparsers = setup_subparsers(parser)

    add_search_subparser(subparsers)
    add_classify_subparser(subparsers)
    add_slice_subparser(subparsers)
    add_blacklist_subparser(subparsers)

    return parser


async def async_main(argv: list[str] | None = None) -> None:
    """Async main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(getattr(args, "verbose", False))

    try:
        config, validation_errors = validate_args_and_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if validation_errors:
        for error in validation_errors:
            logger.error(f"Error: {error}")
        sys.exit(1)

    try:
        if args.command == "search":
            from .commands.search import search_command

            await search_command(args, config)
        elif args.command == "classify":
            from .commands.classify import classify_command

            await classify_command(args, config)
        elif args.command == "slice":
            from .commands.slice import slice_command

            await slice_command(args, config)
        elif args.command == "blacklist":
            from .commands.blacklist import blacklist_command

            await blacklist_command(args, config)
        else:
            logger.error(f"Unknown command: {args.command}")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
    except TagSeekError as e:
        logger.error(f"{e}")
        if config.debug:
            logger.exception("Full error details:")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        logger.exception("Full error details:")
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        asyncio.run(async_main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
