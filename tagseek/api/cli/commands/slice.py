"""Slice command module - partitions the catalog by token budget."""

import argparse
import asyncio

from tagseek.core.config import Config
from tagseek.core.tokens import catalog_cost
from tagseek.extraction import CtagsExtractor
from tagseek.service_factory import create_tokenizer
from tagseek.services.slicing_service import slice_catalog

from ..utils.rich_output import RichOutputFormatter


async def slice_command(args: argparse.Namespace, config: Config) -> None:
    """Execute the slice command.

    Args:
        args: Parsed command-line arguments
        config: Pre-validated configuration instance
    """
    formatter = RichOutputFormatter(verbose=args.verbose)
    repo_root = config.require_repo_location()

    extractor = CtagsExtractor(config.extraction)
    catalog = (await asyncio.to_thread(extractor.extract, repo_root)).retain_tags()
    tokenizer = create_tokenizer(config)
    max_tokens = config.search.slice_max_tokens

    with formatter.create_progress() as progress:
        task = progress.add_task("Slicing tags", total=len(catalog))
        slices = slice_catalog(
            catalog,
            tokenizer,
            max_tokens,
            on_progress=lambda count: progress.advance(task, count),
        )

    rows = [
        (index, len(group), catalog_cost(group, tokenizer))
        for index, group in enumerate(slices, start=1)
    ]
    formatter.slices_table(rows, max_tokens)
    formatter.success(f"{len(catalog)} tags in {len(slices)} slices")

    oversized = sum(1 for _, _, tokens in rows if tokens > max_tokens)
    if oversized:
        formatter.warning(
            f"{oversized} slice(s) hold a single tag larger than the ceiling"
        )
