"""Search command module - runs the finder agent over a repository."""

import argparse

from tagseek.core.config import Config
from tagseek.service_factory import create_services
from tagseek.version import __version__

from ..utils.rich_output import RichOutputFormatter


async def search_command(args: argparse.Namespace, config: Config) -> None:
    """Execute the search command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    repo_root = config.require_repo_location()
    formatter.startup_info(__version__, repo_root, config.llm.model)

    services = create_services(config)

    catalog = await services.load_catalog(use_blacklist=not args.no_blacklist)
    formatter.info(f"Loaded {len(catalog)} tags")

    on_content = None if args.quiet else formatter.stream_content
    try:
        answer = await services.search_service.search(
            args.query, catalog, on_content=on_content
        )
    finally:
        if on_content is not None:
            formatter.end_stream()

    formatter.answer(answer)
    formatter.usage_summary(services.llm_provider.get_usage_stats())
