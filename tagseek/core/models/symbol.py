"""Symbol records as emitted by Universal Ctags' JSON output.

Each output line is either a ``tag`` (a named code construct with a syntactic
kind) or a ``ptag`` (a pseudo tag describing the parser run). The two shapes
are modeled as a discriminated union on the ``_type`` key so that a tag
without a kind cannot be constructed.
"""

import json
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)

from tagseek.core.exceptions import MalformedRecordError, MissingFieldError


class _BaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str | None = None
    path: Path | None = None
    pattern: str | None = None
    parser_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parserName", "parser_name"),
        serialization_alias="parserName",
    )

    @property
    def is_tag(self) -> bool:
        return False

    def name_contains(self, name: str) -> bool:
        if self.name is None:
            return False
        return name.lower() in self.name.lower()

    def path_is(self, path: Path | str) -> bool:
        if self.path is None:
            return False
        return self.path == Path(path)

    def kind_contains(self, kind: str) -> bool:
        return False

    def line_within(self, start: int, end: int) -> bool:
        return False

    def to_json(self) -> str:
        """Canonical serialized form, used for prompts and token costs."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class TagRecord(_BaseRecord):
    """A named code construct (function, struct, note comment, ...)."""

    record_kind: Literal["tag"] = Field(default="tag", alias="_type")
    kind: str
    scope: str | None = None
    scope_kind: str | None = Field(
        default=None,
        validation_alias=AliasChoices("scopeKind", "scope_kind"),
        serialization_alias="scopeKind",
    )
    line: int | None = Field(default=None, ge=0)

    @property
    def is_tag(self) -> bool:
        return True

    def kind_contains(self, kind: str) -> bool:
        return kind.lower() in self.kind.lower()

    def line_within(self, start: int, end: int) -> bool:
        if self.line is None:
            return False
        return start <= self.line <= end


class PseudoTagRecord(_BaseRecord):
    """Parser metadata entry (``!_TAG_...``); never has a kind or location."""

    record_kind: Literal["ptag"] = Field(default="ptag", alias="_type")


SymbolRecord = Annotated[
    Union[TagRecord, PseudoTagRecord], Field(discriminator="record_kind")
]

_record_adapter: TypeAdapter[Any] = TypeAdapter(SymbolRecord)


def parse_record(
    raw: str, line_number: int | None = None
) -> TagRecord | PseudoTagRecord:
    """Parse one line of ctags JSON output.

    Raises:
        MalformedRecordError: Line is not a JSON object or fails validation
        MissingFieldError: A ``tag`` line has no ``kind``
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedRecordError(f"invalid JSON: {e.msg}", line_number) from e

    if not isinstance(data, dict):
        raise MalformedRecordError(
            f"expected a JSON object, got {type(data).__name__}", line_number
        )

    if data.get("_type") == "tag" and data.get("kind") is None:
        raise MissingFieldError("kind", line_number)

    try:
        return _record_adapter.validate_python(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedRecordError(errors, line_number) from e
