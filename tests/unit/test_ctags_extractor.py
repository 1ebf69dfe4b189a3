"""Tests for ctags command construction and output handling."""

import json
import subprocess
from pathlib import Path

import pytest

from tagseek.core.config import ExtractionConfig
from tagseek.core.exceptions import ExtractionError, MissingFieldError
from tagseek.extraction import CtagsExtractor


def completed(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b""):
    return subprocess.CompletedProcess(
        args=["ctags"], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def extractor():
    return CtagsExtractor(ExtractionConfig(languages=["Rust", "Python"], exclude=["vendor"]))


class TestBuildCommand:
    def test_command_layout(self, extractor):
        command = extractor.build_command(Path("/repo"), exclude=["target"])

        assert command[0] == "ctags"
        assert command[1] == "--languages=Rust,Python"
        assert command[-1] == "/repo"
        for flag in ("--fields=+n", "-R", "--output-format=json"):
            assert flag in command
        assert command[command.index("-f") + 1] == "-"
        assert "--exclude=vendor" in command
        assert "--exclude=target" in command

    def test_note_kinds(self, extractor):
        args = extractor.note_arguments()

        assert "--kinddef-Rust=d,devnote,devnote-comments" in args
        assert "--kinddef-Python=d,devnote,devnote-comments" in args
        assert r"--regex-Rust=/\/\/\s*DEV:\s*([^\n]*)/\1/d/" in args
        assert r"--regex-Python=/#\s*DEV:\s*([^\n]*)/\1/d/" in args

    def test_custom_marker_is_escaped(self):
        config = ExtractionConfig(languages=["Go"], note_marker="TODO(me):", note_kind="todo", note_kind_letter="t")
        args = CtagsExtractor(config).note_arguments()

        assert args[0] == "--kinddef-Go=t,todo,todo-comments"
        assert r"TODO\(me\):" in args[1]
        assert args[1].endswith(r"/\1/t/")

    def test_languages_without_note_pattern(self):
        config = ExtractionConfig(languages=["Zig"])
        assert CtagsExtractor(config).note_arguments() == []


class TestExtract:
    def test_ingests_output(self, extractor, monkeypatch):
        lines = [
            {"_type": "ptag", "name": "JSON_OUTPUT_VERSION", "path": "0.1"},
            {"_type": "tag", "name": "main", "path": "src/main.rs", "kind": "function", "line": 1},
        ]
        output = "\n".join(json.dumps(line) for line in lines).encode()
        monkeypatch.setattr(
            "tagseek.extraction.ctags.subprocess.run", lambda *a, **kw: completed(output)
        )

        catalog = extractor.extract(Path("/repo"))

        assert len(catalog) == 2
        assert [r.name for r in catalog.retain_tags()] == ["main"]

    def test_missing_executable(self, extractor, monkeypatch):
        def run(*args, **kwargs):
            raise FileNotFoundError("ctags")

        monkeypatch.setattr("tagseek.extraction.ctags.subprocess.run", run)

        with pytest.raises(ExtractionError, match="not found"):
            extractor.extract(Path("/repo"))

    def test_non_zero_exit(self, extractor, monkeypatch):
        monkeypatch.setattr(
            "tagseek.extraction.ctags.subprocess.run",
            lambda *a, **kw: completed(returncode=1, stderr=b"ctags: bad option"),
        )

        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract(Path("/repo"))

        assert exc_info.value.returncode == 1
        assert "bad option" in exc_info.value.stderr

    def test_timeout(self, extractor, monkeypatch):
        def run(*args, **kwargs):
            raise subprocess.TimeoutExpired(cmd="ctags", timeout=1)

        monkeypatch.setattr("tagseek.extraction.ctags.subprocess.run", run)

        with pytest.raises(ExtractionError, match="timed out"):
            extractor.extract(Path("/repo"))

    def test_undecodable_output(self, extractor, monkeypatch):
        monkeypatch.setattr(
            "tagseek.extraction.ctags.subprocess.run", lambda *a, **kw: completed(b"\xff\xfe")
        )

        with pytest.raises(ExtractionError, match="UTF-8"):
            extractor.extract(Path("/repo"))

    def test_malformed_output_aborts(self, extractor, monkeypatch):
        output = b'{"_type": "tag", "name": "main", "path": "src/main.rs"}\n'
        monkeypatch.setattr(
            "tagseek.extraction.ctags.subprocess.run", lambda *a, **kw: completed(output)
        )

        with pytest.raises(MissingFieldError):
            extractor.extract(Path("/repo"))
