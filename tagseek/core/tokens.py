"""Token counting for context-window budgeting."""

from typing import Any, Protocol, runtime_checkable

import tiktoken

from tagseek.core.models import SymbolCatalog
from tagseek.core.models.catalog import Record

DEFAULT_ENCODING = "cl100k_base"


@runtime_checkable
class Tokenizer(Protocol):
    """Anything that can count the tokens of a text fragment."""

    def count(self, text: str) -> int: ...


class TiktokenTokenizer:
    """Exact token counts using a tiktoken BPE encoding."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self._encoding = tiktoken.get_encoding(encoding)

    @classmethod
    def for_model(cls, model: str) -> "TiktokenTokenizer":
        """Pick the encoding tiktoken associates with ``model``.

        Unknown model names fall back to ``cl100k_base``.
        """
        try:
            encoding = tiktoken.encoding_for_model(model).name
        except KeyError:
            encoding = DEFAULT_ENCODING
        return cls(encoding)

    @property
    def encoding_name(self) -> str:
        return self._encoding.name

    def count(self, text: str) -> int:
        # Special-token text inside source code is still just text to count
        return len(self._encoding.encode(text, disallowed_special=()))


class ProviderTokenizer:
    """Counts tokens the way an LLM provider estimates them."""

    def __init__(self, provider: Any):
        self._provider = provider

    def count(self, text: str) -> int:
        return self._provider.estimate_tokens(text)


def record_cost(record: Record, tokenizer: Tokenizer) -> int:
    return tokenizer.count(record.to_json())


def catalog_cost(catalog: SymbolCatalog, tokenizer: Tokenizer) -> int:
    return sum(record_cost(r, tokenizer) for r in catalog)
