"""Fixtures for command-line tests."""

from pathlib import Path

import pytest

from wasm_factory import build_component, custom
from witdocs import codec


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Run every command from an empty directory with no WITDOCS_* overrides."""
    monkeypatch.chdir(tmp_path)
    for name in ("WITDOCS_WASM_TOOLS", "WITDOCS_LOG_LEVEL", "WITDOCS_LOG_FORMAT", "WITDOCS_REPLACE_EXISTING"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def documented_component(tmp_path: Path, app_tree) -> Path:
    path = tmp_path / "documented.wasm"
    path.write_bytes(build_component(custom("package-docs", codec.encode(app_tree))))
    return path
