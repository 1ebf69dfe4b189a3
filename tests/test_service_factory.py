"""Tests for service wiring and session catalog loading."""

import pytest

from tagseek.core.config import Config
from tagseek.extraction import CtagsExtractor
from tagseek.service_factory import create_services
from tests.fixtures.fake_providers import FakeLLMProvider


@pytest.fixture
def config(tmp_path, clean_environment):
    (tmp_path / "src").mkdir()
    (tmp_path / "target").mkdir()
    return Config(
        target_dir=tmp_path,
        repo_location=str(tmp_path),
        project_summary="a rust crate",
        classifier={"max_attempts": 2},
    )


def test_services_share_one_provider(config):
    llm = FakeLLMProvider()
    services = create_services(config, llm_provider=llm)

    assert services.llm_provider is llm
    assert services.config is config


@pytest.mark.asyncio
async def test_load_catalog_excludes_blacklisted_entries(config, sample_catalog, monkeypatch):
    seen = {}

    def extract(self, repo_root, exclude=()):
        seen["root"] = repo_root
        seen["exclude"] = list(exclude)
        return sample_catalog

    monkeypatch.setattr(CtagsExtractor, "extract", extract)
    llm = FakeLLMProvider(script=['["target"]'])
    services = create_services(config, llm_provider=llm)

    catalog = await services.load_catalog()

    assert seen == {"root": config.repo_location, "exclude": ["target"]}
    assert catalog == sample_catalog.retain_tags()
    assert "a rust crate" in llm.calls[0]["messages"][-1].content


@pytest.mark.asyncio
async def test_load_catalog_without_blacklist(config, sample_catalog, monkeypatch):
    monkeypatch.setattr(CtagsExtractor, "extract", lambda self, root, exclude=(): sample_catalog)
    llm = FakeLLMProvider()

    catalog = await create_services(config, llm_provider=llm).load_catalog(use_blacklist=False)

    assert len(catalog) == 4
    assert llm.calls == []


@pytest.mark.asyncio
async def test_classifier_uses_configured_attempts(config, foo_bar_catalog):
    llm = FakeLLMProvider(responder=lambda messages: "maybe")
    services = create_services(config, llm_provider=llm)

    result = await services.classification_service.classify(foo_bar_catalog[:1], "p")

    assert result.failures[0].attempts == 2
