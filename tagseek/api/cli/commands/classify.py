"""Classify command module - filters tags by a natural-language predicate."""

import argparse

from tagseek.core.config import Config
from tagseek.service_factory import create_services

from ..utils.rich_output import RichOutputFormatter


async def classify_command(args: argparse.Namespace, config: Config) -> None:
    """Execute the classify command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    services = create_services(config)

    catalog = await services.load_catalog(use_blacklist=not args.no_blacklist)

    # Cheap structural filters first; every remaining tag costs a request
    if args.kind:
        catalog = catalog.filter_by_kind(args.kind)
    if args.name:
        catalog = catalog.filter_by_name(args.name)

    if not catalog:
        formatter.warning("No tags to classify")
        return

    formatter.info(f"Classifying {len(catalog)} tags")
    result = await services.classification_service.classify(catalog, args.predicate)

    if result.matched:
        formatter.tags_table(result.matched, title=f"Tags matching: {args.predicate}")
    else:
        formatter.warning("No tags matched")

    for failure in result.failures:
        formatter.warning(f"{failure.record.name} ({failure.record.path}): {failure.error}")

    formatter.usage_summary(services.llm_provider.get_usage_stats())
