"""
Pytest configuration and fixtures for TagSeek tests.
"""

import json
import os

import pytest

from tagseek.core.models import SymbolCatalog

SAMPLE_LINES = [
    {
        "_type": "ptag",
        "name": "JSON_OUTPUT_VERSION",
        "path": "0.1",
        "pattern": "in development",
    },
    {
        "_type": "tag",
        "name": "Foo",
        "path": "src/foo.rs",
        "pattern": "/^pub fn Foo() {$/",
        "line": 10,
        "kind": "function",
    },
    {
        "_type": "tag",
        "name": "bar",
        "path": "src/bar.rs",
        "pattern": "/^struct bar {$/",
        "line": 50,
        "kind": "struct",
    },
    {
        "_type": "tag",
        "name": "foo_helper",
        "path": "src/foo.rs",
        "pattern": "/^fn foo_helper() {$/",
        "line": 20,
        "kind": "function",
        "scope": "Foo",
        "scopeKind": "function",
    },
    {
        "_type": "ptag",
        "name": "TAG_PROGRAM_NAME",
        "path": "Universal Ctags",
        "parserName": "Rust",
    },
    {
        "_type": "tag",
        "name": "remove the unwrap here",
        "path": "src/bar.rs",
        "pattern": "/^    \\/\\/ DEV: remove the unwrap here$/",
        "line": 61,
        "kind": "devnote",
    },
]


@pytest.fixture
def sample_lines() -> list[str]:
    """ctags JSON output lines mixing tags and pseudo tags."""
    return [json.dumps(line) for line in SAMPLE_LINES]


@pytest.fixture
def sample_catalog(sample_lines) -> SymbolCatalog:
    return SymbolCatalog.ingest(sample_lines)


@pytest.fixture
def foo_bar_catalog() -> SymbolCatalog:
    """Two tags: function Foo at line 10 and struct bar at line 50."""
    return SymbolCatalog.ingest(
        [
            json.dumps(
                {"_type": "tag", "name": "Foo", "path": "src/foo.rs", "kind": "function", "line": 10}
            ),
            json.dumps(
                {"_type": "tag", "name": "bar", "path": "src/bar.rs", "kind": "struct", "line": 50}
            ),
        ]
    )


@pytest.fixture
def clean_environment():
    """Clean up TagSeek environment variables before and after tests."""

    def is_ours(key: str) -> bool:
        return key.startswith("TAGSEEK_") or key == "OPENAI_API_KEY"

    original_env = {}
    for key in list(os.environ.keys()):
        if is_ours(key):
            original_env[key] = os.environ[key]
            del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if is_ours(key):
            del os.environ[key]

    for key, value in original_env.items():
        os.environ[key] = value
