"""Exception hierarchy for TagSeek.

Ingestion and extraction errors are fatal to the call that raised them.
Tool-call and classification errors are absorbed by the services and turned
into corrective conversation turns.
"""

from typing import Any


class TagSeekError(Exception):
    """Base class for all TagSeek errors."""


class ConfigurationError(TagSeekError):
    """Required configuration is missing or invalid."""


class IngestionError(TagSeekError):
    """A line of extraction output could not be turned into a record."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedRecordError(IngestionError):
    """Line is not a JSON object matching the symbol record schema."""


class MissingFieldError(IngestionError):
    """A tag record lacks a field that tags must carry."""

    def __init__(self, field: str, line_number: int | None = None):
        self.field = field
        super().__init__(f"tag record is missing required field '{field}'", line_number)


class ExtractionError(TagSeekError):
    """The ctags process failed or produced unusable output."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class UnknownOperationError(TagSeekError):
    """The agent asked for an operation that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown operation: {name}")


class ToolArgumentParseError(TagSeekError):
    """Tool-call arguments do not match the operation's schema."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__(f"could not parse {operation} arguments")


class UnparseableClassificationAnswer(TagSeekError):
    """The model answered a classification prompt with something other than a boolean."""

    def __init__(self, answer: str):
        self.answer = answer
        super().__init__(f"expected 'true' or 'false', got {answer!r}")


class ClassificationFailed(TagSeekError):
    """No boolean answer was obtained within the attempt bound."""

    def __init__(self, attempts: int, last_answer: str):
        self.attempts = attempts
        self.last_answer = last_answer
        super().__init__(
            f"no boolean answer after {attempts} attempts (last: {last_answer!r})"
        )


class SearchTurnLimitError(TagSeekError):
    """The search loop reached its turn ceiling without a stop signal."""

    def __init__(self, max_turns: int, session: Any = None):
        self.max_turns = max_turns
        self.session = session
        super().__init__(f"search did not stop within {max_turns} turns")


class LLMProviderError(RuntimeError):
    """The language-model service failed after transport-level retries."""


class MalformedLLMResponseError(TagSeekError):
    """A model answer that must be machine-parsed could not be parsed."""

    def __init__(self, message: str, content: str = ""):
        self.content = content
        super().__init__(message)
