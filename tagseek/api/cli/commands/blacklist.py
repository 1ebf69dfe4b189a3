"""Blacklist command module - shows root entries excluded from extraction."""

import argparse

from tagseek.core.config import Config
from tagseek.service_factory import create_services
from tagseek.utils.project_detection import list_root_entries

from ..utils.rich_output import RichOutputFormatter


async def blacklist_command(args: argparse.Namespace, config: Config) -> None:
    """Execute the blacklist command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    repo_root = config.require_repo_location()
    services = create_services(config)

    entries = list_root_entries(repo_root)
    formatter.verbose_info(f"Root entries: {', '.join(entries)}")

    excluded = await services.blacklist_service.classify_entries(
        entries, config.project_summary
    )
    if not excluded:
        formatter.info("Nothing to exclude")
        return

    formatter.success(f"Excluding {len(excluded)} of {len(entries)} root entries:")
    for entry in excluded:
        formatter.console.print(f"  {entry}", highlight=False)
