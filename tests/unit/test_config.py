"""Tests for layered configuration loading."""

import argparse
import os
from pathlib import Path

import pytest

from tagseek.core.config import ClassifierConfig, Config, LLMConfig, SearchConfig
from tagseek.core.exceptions import ConfigurationError
from tests.config_test_base import ConfigTestBase


class TestConfigPrecedence(ConfigTestBase):
    def test_defaults(self):
        config = self.create_isolated_config()

        assert config.llm.model == "gpt-4-1106-preview"
        assert config.llm.api_key is None
        assert config.search.max_turns == 25
        assert config.classifier.max_attempts == 5
        assert config.extraction.note_marker == "DEV:"
        assert config.repo_location is None

    def test_config_file(self):
        self.write_json(
            self.config_file,
            {"project_summary": "a compiler", "search": {"max_turns": 7}},
        )

        config = Config(config_file=self.config_file, target_dir=self.project_dir)

        assert config.project_summary == "a compiler"
        assert config.search.max_turns == 7

    def test_local_config_beats_config_file(self):
        self.write_json(self.config_file, {"search": {"max_turns": 7}})
        self.write_json(self.local_config, {"search": {"max_turns": 9}})

        config = Config(config_file=self.config_file, target_dir=self.project_dir)

        assert config.search.max_turns == 9

    def test_env_beats_files(self):
        self.write_json(self.local_config, {"search": {"max_turns": 9}})
        os.environ["TAGSEEK_SEARCH__MAX_TURNS"] = "11"
        os.environ["TAGSEEK_CLASSIFIER__MAX_CONCURRENCY"] = "4"

        config = self.create_isolated_config()

        assert config.search.max_turns == 11
        assert config.classifier.max_concurrency == 4

    def test_cli_beats_env(self):
        os.environ["TAGSEEK_LLM_MODEL"] = "gpt-env"
        args = argparse.Namespace(
            path=self.project_dir,
            summary=None,
            llm_model="gpt-cli",
            max_turns=3,
            verbose=False,
        )

        config = Config.from_cli_args(args, target_dir=self.project_dir)

        assert config.llm.model == "gpt-cli"
        assert config.search.max_turns == 3
        assert config.repo_location == self.project_dir.resolve()

    def test_openai_api_key_fallback(self):
        os.environ["OPENAI_API_KEY"] = "sk-openai"

        config = self.create_isolated_config()

        assert config.llm.api_key.get_secret_value() == "sk-openai"
        assert config.llm.is_provider_configured()
        assert "sk-openai" not in repr(config.llm)

    def test_missing_config_file(self):
        with pytest.raises(ValueError, match="not found"):
            Config(config_file=self.temp_dir / "nope.json")

    def test_invalid_json(self):
        self.config_file.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            Config(config_file=self.config_file)

    def test_validate_for_command(self):
        config = self.create_isolated_config(repo_location=str(self.project_dir))

        assert config.validate_for_command("slice") == []
        errors = config.validate_for_command("search")
        assert len(errors) == 1
        assert "api_key" in errors[0]

    def test_require_repo_location(self):
        config = self.create_isolated_config()

        with pytest.raises(ConfigurationError):
            config.require_repo_location()

        config.repo_location = self.project_dir
        assert config.require_repo_location() == self.project_dir.resolve()

    def test_save_omits_secrets(self):
        config = self.create_isolated_config(
            llm={"api_key": "sk-secret"}, project_summary="a compiler"
        )
        target = self.temp_dir / "saved.json"

        config.save(target)

        text = target.read_text()
        assert "sk-secret" not in text
        assert Config(config_file=target).project_summary == "a compiler"


class TestSubConfigs:
    def test_classifier_temperature_schedule(self):
        config = ClassifierConfig(initial_temperature=0.1, temperature_step=0.3, max_temperature=0.5)

        assert config.temperature_for(1) == pytest.approx(0.1)
        assert config.temperature_for(2) == pytest.approx(0.4)
        assert config.temperature_for(3) == pytest.approx(0.5)

    def test_classifier_rejects_inverted_temperatures(self):
        with pytest.raises(ValueError):
            ClassifierConfig(initial_temperature=1.5, max_temperature=1.0)

    def test_search_turn_limit_can_be_disabled(self):
        assert SearchConfig(max_turns=None).max_turns is None
        with pytest.raises(ValueError):
            SearchConfig(max_turns=0)

    def test_base_url_normalized(self, clean_environment):
        config = LLMConfig(base_url="https://example.com/v1/")
        assert config.base_url == "https://example.com/v1"

        with pytest.raises(ValueError):
            LLMConfig(base_url="example.com")

    def test_provider_config(self, clean_environment):
        config = LLMConfig(api_key="sk-test", model="gpt-x")
        assert config.get_provider_config() == {
            "model": "gpt-x",
            "timeout": 60,
            "max_retries": 3,
            "api_key": "sk-test",
        }
