"""Symbol record and catalog models."""

from .catalog import SymbolCatalog
from .symbol import PseudoTagRecord, SymbolRecord, TagRecord, parse_record

__all__ = [
    "PseudoTagRecord",
    "SymbolCatalog",
    "SymbolRecord",
    "TagRecord",
    "parse_record",
]
