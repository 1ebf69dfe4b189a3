"""Greedy partitioning of a catalog into token-bounded slices.

Used for bulk summarization: every slice fits a model context window of
``max_tokens`` so the whole catalog can be fed to the model piecewise.
"""

from collections.abc import Callable

from loguru import logger

from tagseek.core.models import SymbolCatalog
from tagseek.core.tokens import Tokenizer, record_cost


def max_slice(
    catalog: SymbolCatalog, tokenizer: Tokenizer, max_tokens: int
) -> tuple[SymbolCatalog, SymbolCatalog]:
    """Split off the longest prefix whose total cost fits ``max_tokens``.

    A first record that alone exceeds the ceiling becomes a one-record head,
    so the head is never empty for a non-empty catalog.

    Returns:
        Tuple of (head, rest)
    """
    if max_tokens <= 0:
        raise ValueError("max_tokens must be positive")

    records = catalog.records
    total = 0
    taken = 0
    for record in records:
        cost = record_cost(record, tokenizer)
        if total + cost > max_tokens:
            if taken == 0:
                logger.debug(
                    f"Record {record.name!r} costs {cost} tokens, "
                    f"over the {max_tokens} ceiling; emitting it alone"
                )
                taken = 1
            break
        total += cost
        taken += 1

    return SymbolCatalog(records[:taken]), SymbolCatalog(records[taken:])


def slice_catalog(
    catalog: SymbolCatalog,
    tokenizer: Tokenizer,
    max_tokens: int,
    on_progress: Callable[[int], None] | None = None,
) -> list[SymbolCatalog]:
    """Partition ``catalog`` into maximal contiguous token-bounded groups.

    Single pass, order preserving, never drops a record. Concatenating the
    result reproduces the input.

    Args:
        catalog: Catalog to partition
        tokenizer: Token counter used for each record's canonical JSON
        max_tokens: Ceiling for every group except one-record oversized groups
        on_progress: Called with the size of each group as it is closed

    Returns:
        List of catalogs (empty for an empty input)
    """
    if max_tokens <= 0:
        raise ValueError("max_tokens must be positive")

    slices: list[SymbolCatalog] = []
    current: list = []
    total = 0

    def close() -> None:
        slices.append(SymbolCatalog(current))
        if on_progress is not None:
            on_progress(len(current))

    for record in catalog:
        cost = record_cost(record, tokenizer)
        if current and total + cost > max_tokens:
            close()
            current = []
            total = 0
        current.append(record)
        total += cost

    if current:
        close()

    logger.debug(f"Made {len(slices)} slices from {len(catalog)} records")
    return slices
