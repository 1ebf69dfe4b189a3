"""Declarative registry of the filter operations exposed to the finder agent.

Each operation has a pydantic argument model (its JSON schema is what the
model sees as the tool's parameters), an effect describing how its output
combines with the session's accumulated result, and a pure implementation
that derives a catalog from the full session catalog.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tagseek.core.exceptions import ToolArgumentParseError, UnknownOperationError
from tagseek.core.models import SymbolCatalog


class Effect(str, Enum):
    """How an operation's output combines with the accumulated result."""

    REPLACE = "replace"
    EXTEND = "extend"
    STOP = "stop"


class FindNameArgs(BaseModel):
    """Checks if the tag name contains the given name as argument"""

    name: str = Field(description="The name to check if contained")


class FindPathArgs(BaseModel):
    """Checks if the tag path is the path specified"""

    path: Path = Field(description="The path specified")


class FindKindArgs(BaseModel):
    """Checks if the tag kind contains the given kind as argument"""

    kind: str = Field(description="The kind to check if contained")


class FindLineRangeArgs(BaseModel):
    """Checks if a tag is within an inclusive range"""

    model_config = ConfigDict(populate_by_name=True)

    start: int = Field(alias="from", ge=0, description="the start of the range")
    end: int = Field(alias="to", ge=0, description="the end of the range")


class StopSearchingArgs(BaseModel):
    """Run this function to stop the searching of the file where the predicate is found"""

    predicate_path: list[Path] | None = Field(
        default=None,
        description="The file where the predicate is found, if not found set to none",
    )


@dataclass(frozen=True)
class Operation:
    """Operation definition with metadata and implementation."""

    name: str
    description: str
    args_model: type[BaseModel]
    effect: Effect
    apply: Callable[[SymbolCatalog, Any], SymbolCatalog] | None = None

    def parse_arguments(self, raw: str) -> BaseModel:
        """Validate raw JSON arguments against the operation's schema.

        Raises:
            ToolArgumentParseError: If the arguments do not match
        """
        try:
            return self.args_model.model_validate_json(raw.strip() or "{}")
        except ValidationError as e:
            raise ToolArgumentParseError(self.name, str(e)) from e

    def tool_schema(self) -> dict[str, Any]:
        """OpenAI function-tool definition for this operation."""
        parameters = self.args_model.model_json_schema()
        parameters.pop("title", None)
        parameters.pop("description", None)
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": parameters,
            },
        }


OPERATION_DEFINITIONS = [
    Operation(
        name="find_by_name",
        description=(
            "Replace the current results with every tag whose name contains "
            "the given text (case-insensitive)."
        ),
        args_model=FindNameArgs,
        effect=Effect.REPLACE,
        apply=lambda catalog, args: catalog.filter_by_name(args.name),
    ),
    Operation(
        name="find_by_path",
        description=(
            "Replace the current results with every tag located in exactly "
            "the given file path."
        ),
        args_model=FindPathArgs,
        effect=Effect.REPLACE,
        apply=lambda catalog, args: catalog.filter_by_path(args.path),
    ),
    Operation(
        name="find_by_kind",
        description=(
            "Add every tag whose kind contains the given text (case-insensitive) "
            "to the current results."
        ),
        args_model=FindKindArgs,
        effect=Effect.EXTEND,
        apply=lambda catalog, args: catalog.filter_by_kind(args.kind),
    ),
    Operation(
        name="find_by_line_range",
        description=(
            "Replace the current results with every tag whose line lies "
            "within the inclusive range."
        ),
        args_model=FindLineRangeArgs,
        effect=Effect.REPLACE,
        apply=lambda catalog, args: catalog.filter_by_line_range(args.start, args.end),
    ),
    Operation(
        name="stop_searching",
        description=(
            "Stop searching and report the files where the predicate is found, "
            "or null if it was not found."
        ),
        args_model=StopSearchingArgs,
        effect=Effect.STOP,
    ),
]

OPERATION_REGISTRY: dict[str, Operation] = {op.name: op for op in OPERATION_DEFINITIONS}


def get_operation(name: str) -> Operation:
    """Look up an operation by name.

    Raises:
        UnknownOperationError: If no operation has that name
    """
    try:
        return OPERATION_REGISTRY[name]
    except KeyError:
        raise UnknownOperationError(name) from None


def parse_arguments(name: str, raw: str) -> tuple[Operation, BaseModel]:
    """Resolve an operation and validate its arguments in one step."""
    operation = get_operation(name)
    return operation, operation.parse_arguments(raw)


def tool_schemas() -> list[dict[str, Any]]:
    """Tool definitions for every registered operation, in registry order."""
    return [op.tool_schema() for op in OPERATION_DEFINITIONS]
