"""Blacklist Service for TagSeek - ask the model which root entries are build output.

The entries it picks (``node_modules``, ``dist``, ``target``, ...) are passed
to ctags as exclusions, which keeps generated code out of the catalog.
"""

import json
import re
from pathlib import Path

from loguru import logger

from tagseek.core.exceptions import MalformedLLMResponseError
from tagseek.interfaces.llm_provider import ChatMessage, LLMProvider
from tagseek.services.prompts.blacklist import (
    EXAMPLE_INPUT,
    EXAMPLE_RESPONSE,
    SYSTEM_MESSAGE,
)
from tagseek.utils.project_detection import list_root_entries

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL)


def extract_json_array(content: str) -> list[str]:
    """Parse a JSON array of strings, tolerating a markdown code block.

    Raises:
        MalformedLLMResponseError: If no array of strings can be parsed
    """
    text = content.strip()
    for match in _CODE_BLOCK_PATTERN.findall(content):
        if match.strip():
            text = match.strip()
            break

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedLLMResponseError(
            f"Blacklist answer is not valid JSON: {e}", content
        ) from e

    if not isinstance(parsed, list) or not all(isinstance(p, str) for p in parsed):
        raise MalformedLLMResponseError(
            "Blacklist answer must be a JSON array of strings", content
        )
    return parsed


class BlacklistService:
    """Chooses root directory entries that hold no source code."""

    def __init__(self, llm_provider: LLMProvider, temperature: float = 0.0):
        self._llm = llm_provider
        self._temperature = temperature

    async def blacklist(self, repo_root: Path, project_summary: str) -> list[str]:
        """Entries directly under ``repo_root`` to exclude from extraction."""
        return await self.classify_entries(list_root_entries(repo_root), project_summary)

    async def classify_entries(
        self, root_entries: list[str], project_summary: str
    ) -> list[str]:
        """Ask the model which of ``root_entries`` are build artifacts.

        Names the model invents that are not among ``root_entries`` are
        dropped.
        """
        if not root_entries:
            return []

        summary = project_summary.strip() or "a software project"
        messages = [
            ChatMessage.system(SYSTEM_MESSAGE),
            ChatMessage.user(EXAMPLE_INPUT),
            ChatMessage.assistant(EXAMPLE_RESPONSE),
            ChatMessage.user(f"{summary}: {json.dumps(root_entries, indent=2)}"),
        ]

        response = await self._llm.chat(messages, temperature=self._temperature)
        answer = extract_json_array(response.message.content or "")

        known = set(root_entries)
        unknown = [entry for entry in answer if entry not in known]
        if unknown:
            logger.debug(f"Ignoring blacklist entries not in the root: {unknown}")

        result = [entry for entry in answer if entry in known]
        logger.debug(f"blacklist: {result}")
        return result
