"""Immutable symbol catalog with pure filtering operations."""

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import overload

from loguru import logger

from tagseek.core.models.symbol import PseudoTagRecord, TagRecord, parse_record

Record = TagRecord | PseudoTagRecord


class SymbolCatalog:
    """Ordered, immutable collection of symbol records.

    Order is the extraction tool's emission order. Filters treat the catalog
    as a set, while slicing relies on the order for determinism. Every
    operation returns a new catalog.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[Record] = ()):
        self._records: tuple[Record, ...] = tuple(records)

    @classmethod
    def ingest(cls, raw_lines: Iterable[str]) -> "SymbolCatalog":
        """Parse extraction output, one JSON record per line.

        All-or-nothing: the first malformed line aborts the whole call.
        Blank lines are skipped.
        """
        records = []
        for line_number, raw in enumerate(raw_lines, start=1):
            raw = raw.strip()
            if not raw:
                continue
            records.append(parse_record(raw, line_number))

        catalog = cls(records)
        logger.debug(f"Ingested {len(catalog)} symbol records")
        return catalog

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    @overload
    def __getitem__(self, index: int) -> Record: ...

    @overload
    def __getitem__(self, index: slice) -> "SymbolCatalog": ...

    def __getitem__(self, index: int | slice) -> "Record | SymbolCatalog":
        if isinstance(index, slice):
            return SymbolCatalog(self._records[index])
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SymbolCatalog):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"SymbolCatalog({len(self._records)} records)"

    def where(self, predicate: Callable[[Record], bool]) -> "SymbolCatalog":
        return SymbolCatalog(r for r in self._records if predicate(r))

    def filter_by_name(self, name: str) -> "SymbolCatalog":
        """Case-insensitive substring match on the record name."""
        return self.where(lambda r: r.name_contains(name))

    def filter_by_path(self, path: Path | str) -> "SymbolCatalog":
        """Exact match on the record path."""
        return self.where(lambda r: r.path_is(path))

    def filter_by_kind(self, kind: str) -> "SymbolCatalog":
        """Case-insensitive substring match on the syntactic kind."""
        return self.where(lambda r: r.kind_contains(kind))

    def filter_by_line_range(self, start: int, end: int) -> "SymbolCatalog":
        """Inclusive line range; an inverted range matches nothing."""
        if start > end:
            return SymbolCatalog()
        return self.where(lambda r: r.line_within(start, end))

    def retain_tags(self) -> "SymbolCatalog":
        result = self.where(lambda r: r.is_tag)
        logger.trace(f"Removed {len(self) - len(result)} pseudo tags")
        return result

    def retain_pseudo_tags(self) -> "SymbolCatalog":
        return self.where(lambda r: not r.is_tag)

    def union(self, other: Iterable[Record]) -> "SymbolCatalog":
        """Append the records of ``other`` that this catalog does not hold.

        Only records already in ``self`` are skipped; ``other`` is taken as is.
        """
        present = set(self._records)
        return SymbolCatalog([*self._records, *(r for r in other if r not in present)])

    def paths(self) -> list[Path]:
        """Distinct record paths in first-seen order."""
        seen: dict[Path, None] = {}
        for record in self._records:
            if record.path is not None:
                seen.setdefault(record.path, None)
        return list(seen)

    def to_json(self) -> str:
        """Serialize as a JSON array of canonical record objects."""
        return "[" + ",".join(r.to_json() for r in self._records) + "]"
