"""Service factory - the composition root for TagSeek.

The CLI loads a Config once and hands it to create_services(), which wires
the provider, extractor and services together into a SearchServices bundle.
Components receive their collaborators explicitly; nothing reads global
state.
"""

import asyncio
from dataclasses import dataclass

from loguru import logger

from tagseek.core.config import Config
from tagseek.core.models import SymbolCatalog
from tagseek.core.tokens import TiktokenTokenizer, Tokenizer
from tagseek.extraction import CtagsExtractor
from tagseek.interfaces.llm_provider import LLMProvider
from tagseek.providers.llm import OpenAILLMProvider
from tagseek.services.blacklist_service import BlacklistService
from tagseek.services.classification_service import ClassificationService
from tagseek.services.search_service import SearchService


@dataclass
class SearchServices:
    """Container for the services of one TagSeek process."""

    config: Config
    llm_provider: LLMProvider
    extractor: CtagsExtractor
    search_service: SearchService
    classification_service: ClassificationService
    blacklist_service: BlacklistService

    async def load_catalog(self, use_blacklist: bool = True) -> SymbolCatalog:
        """Extract the repository's tags, optionally skipping build output.

        The returned catalog is the snapshot for the rest of the session.
        """
        repo_root = self.config.require_repo_location()

        exclude: list[str] = []
        if use_blacklist:
            exclude = await self.blacklist_service.blacklist(
                repo_root, self.config.project_summary
            )
            logger.info(f"Excluding root entries: {exclude}")

        catalog = await asyncio.to_thread(self.extractor.extract, repo_root, exclude)
        return catalog.retain_tags()


def create_provider(config: Config) -> LLMProvider:
    """Build the LLM provider described by ``config.llm``."""
    return OpenAILLMProvider(**config.llm.get_provider_config())


def create_tokenizer(config: Config) -> Tokenizer:
    """tiktoken tokenizer for slicing, by explicit encoding or by model."""
    if config.search.encoding:
        return TiktokenTokenizer(config.search.encoding)
    return TiktokenTokenizer.for_model(config.llm.model)


def create_services(
    config: Config, llm_provider: LLMProvider | None = None
) -> SearchServices:
    """Wire every service from one configuration.

    Args:
        config: Process configuration
        llm_provider: Provider override (tests inject fakes here)

    Returns:
        Fully wired SearchServices bundle
    """
    provider = llm_provider or create_provider(config)
    temperature = config.llm.temperature

    return SearchServices(
        config=config,
        llm_provider=provider,
        extractor=CtagsExtractor(config.extraction),
        search_service=SearchService(
            provider, config.search, temperature=temperature
        ),
        classification_service=ClassificationService(provider, config.classifier),
        blacklist_service=BlacklistService(provider, temperature=temperature),
    )
