"""TagSeek: let a language model find code by narrowing a ctags symbol catalog."""

from .core.models import PseudoTagRecord, SymbolCatalog, TagRecord
from .version import __version__

__all__ = ["PseudoTagRecord", "SymbolCatalog", "TagRecord", "__version__"]
