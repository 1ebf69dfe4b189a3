"""Classification Service for TagSeek - the model as a per-tag boolean oracle.

Every record gets its own conversation: the predicate in the system message,
the record's JSON as the user turn, and a demand for a bare ``true`` or
``false``. Anything else triggers a repair turn at a higher temperature.
All records are classified concurrently.
"""

import asyncio
import contextlib
from dataclasses import dataclass

from loguru import logger

from tagseek.core.config.search_config import ClassifierConfig
from tagseek.core.exceptions import (
    ClassificationFailed,
    UnparseableClassificationAnswer,
)
from tagseek.core.models import SymbolCatalog
from tagseek.core.models.catalog import Record
from tagseek.interfaces.llm_provider import ChatMessage, LLMProvider
from tagseek.services.prompts.classifier import (
    BOOLEAN_REPAIR_MESSAGE,
    LOWERCASE_REPAIR_MESSAGE,
    get_system_message,
)

ANSWER_MAX_TOKENS = 16


@dataclass
class ClassificationOutcome:
    """Final classification state of one record."""

    record: Record
    index: int
    matched: bool | None = None
    attempts: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.matched is None


@dataclass
class ClassificationResult:
    """Matched records (input order) and every per-record outcome."""

    matched: SymbolCatalog
    outcomes: list[ClassificationOutcome]

    @property
    def failures(self) -> list[ClassificationOutcome]:
        return [o for o in self.outcomes if o.failed]


def parse_boolean(answer: str) -> bool:
    """Accept exactly ``true`` or ``false``.

    Surrounding whitespace is stripped first; case and every other
    character must match exactly.

    Raises:
        UnparseableClassificationAnswer: For any other answer
    """
    stripped = answer.strip()
    if stripped == "true":
        return True
    if stripped == "false":
        return False
    raise UnparseableClassificationAnswer(answer)


def repair_message(answer: str) -> str:
    """Corrective instruction tailored to the kind of bad answer."""
    if answer.strip().lower() in ("true", "false"):
        return LOWERCASE_REPAIR_MESSAGE
    return BOOLEAN_REPAIR_MESSAGE


class ClassificationService:
    """Filters a catalog by a natural-language predicate."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        config: ClassifierConfig | None = None,
    ):
        """Initialize classification service.

        Args:
            llm_provider: Model used as the oracle
            config: Attempt bound, concurrency bound and temperature schedule
        """
        self._llm = llm_provider
        self._config = config or ClassifierConfig()

    async def filter(self, catalog: SymbolCatalog, predicate: str) -> SymbolCatalog:
        """Records for which the model says ``predicate`` holds."""
        result = await self.classify(catalog, predicate)
        return result.matched

    async def classify(
        self, catalog: SymbolCatalog, predicate: str
    ) -> ClassificationResult:
        """Classify every record concurrently.

        Records whose classification fails after the attempt bound are
        excluded from the matched catalog and reported in ``failures``.
        Transport errors propagate and abort the whole run.
        """
        logger.info(
            f"Classifying {len(catalog)} tags against predicate: '{predicate}'"
        )

        # Created per run: asyncio primitives bind to the running loop
        lock = asyncio.Lock()
        semaphore = (
            asyncio.Semaphore(self._config.max_concurrency)
            if self._config.max_concurrency
            else None
        )
        matches: list[tuple[int, Record]] = []

        async def run_one(index: int, record: Record) -> ClassificationOutcome:
            gate = semaphore if semaphore is not None else contextlib.nullcontext()
            async with gate:
                outcome = await self.classify_record(record, predicate, index)
            if outcome.matched:
                async with lock:
                    matches.append((index, record))
            return outcome

        tasks = [
            asyncio.create_task(run_one(i, record)) for i, record in enumerate(catalog)
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            # Stop the remaining requests before the failure propagates
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        matches.sort(key=lambda item: item[0])
        result = ClassificationResult(
            matched=SymbolCatalog(record for _, record in matches),
            outcomes=list(outcomes),
        )

        if result.failures:
            logger.warning(
                f"{len(result.failures)} tags could not be classified and were excluded"
            )
        logger.info(f"Classification matched {len(result.matched)}/{len(catalog)} tags")
        return result

    async def classify_record(
        self, record: Record, predicate: str, index: int = 0
    ) -> ClassificationOutcome:
        """Ask until the model gives a boolean or the attempt bound is hit."""
        messages = [
            ChatMessage.system(get_system_message(predicate)),
            ChatMessage.user(record.to_json()),
        ]
        max_attempts = self._config.max_attempts
        attempt = 0

        while True:
            attempt += 1
            response = await self._llm.chat(
                messages,
                temperature=self._config.temperature_for(attempt),
                max_completion_tokens=ANSWER_MAX_TOKENS,
            )
            answer = response.message.content or ""

            try:
                matched = parse_boolean(answer)
            except UnparseableClassificationAnswer as e:
                if max_attempts is not None and attempt >= max_attempts:
                    failure = ClassificationFailed(attempt, answer)
                    logger.warning(f"Tag {record.name!r}: {failure}")
                    return ClassificationOutcome(
                        record=record,
                        index=index,
                        attempts=attempt,
                        error=str(failure),
                    )

                logger.debug(f"Tag {record.name!r} attempt {attempt}: {e}")
                messages.append(ChatMessage.assistant(answer))
                messages.append(ChatMessage.system(repair_message(answer)))
                continue

            return ClassificationOutcome(
                record=record, index=index, matched=matched, attempts=attempt
            )
