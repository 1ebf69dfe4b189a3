"""
Base class for configuration tests with environment and filesystem isolation.
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from tagseek.core.config import LOCAL_CONFIG_NAME, Config


class ConfigTestBase:
    """
    Isolates config tests from:
    - Environment variables (TAGSEEK_*, OPENAI_API_KEY)
    - Local config files (.tagseek.json)
    - File system state

    Usage:
        class TestMyConfig(ConfigTestBase):
            def test_something(self):
                config = self.create_isolated_config(search={"max_turns": 3})
                assert config.search.max_turns == 3
    """

    def setup_method(self):
        self.original_env = os.environ.copy()
        self._clear_tagseek_env()

        self.temp_dir = Path(tempfile.mkdtemp())
        self.project_dir = self.temp_dir / "project"
        self.project_dir.mkdir()
        self.config_file = self.temp_dir / "config.json"
        self.local_config = self.project_dir / LOCAL_CONFIG_NAME

    def teardown_method(self):
        os.environ.clear()
        os.environ.update(self.original_env)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _clear_tagseek_env(self) -> None:
        for key in list(os.environ.keys()):
            if key.startswith("TAGSEEK_") or key == "OPENAI_API_KEY":
                del os.environ[key]

    def write_json(self, path: Path, data: dict[str, Any]) -> Path:
        with open(path, "w") as f:
            json.dump(data, f)
        return path

    def create_isolated_config(self, **kwargs: Any) -> Config:
        """Config that sees no files unless the test wrote them."""
        return Config(target_dir=self.project_dir, **kwargs)
