"""
Shared pytest fixtures for wit-docs tests.

This module provides:
- Builders for WebAssembly module and component binaries
- Sample documentation trees
- Component files written to a temporary directory

Binaries are assembled from raw bytes (see wasm_factory.py) so no
external toolchain is needed to run the suite.
"""

from pathlib import Path

import pytest

from wasm_factory import build_component, build_module, custom
from witdocs.model import DocTree


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def module_bytes() -> bytes:
    return build_module(custom("name", b"\x00\x04\x03app"))


@pytest.fixture
def component_bytes() -> bytes:
    return build_component()


@pytest.fixture
def app_tree() -> DocTree:
    """Single-world tree used in the end-to-end scenario."""
    return DocTree.model_validate(
        {"worlds": {"app": {"docs": "Top level.", "func_exports": {"run": {"docs": "Runs it."}}}}}
    )


@pytest.fixture
def multi_world_tree() -> DocTree:
    return DocTree.model_validate(
        {
            "worlds": {
                "alpha": {"docs": "Alpha world.", "func_exports": {"go": {"docs": "Alpha go."}}},
                "beta": {
                    "docs": "Beta world.",
                    "func_exports": {"go": {"docs": "Beta go."}},
                    "func_imports": {"log": {"docs": "Host logger."}},
                },
            }
        }
    )


@pytest.fixture
def component_file(tmp_path: Path, component_bytes: bytes) -> Path:
    path = tmp_path / "app.wasm"
    path.write_bytes(component_bytes)
    return path


@pytest.fixture
def wit_dir(tmp_path: Path) -> Path:
    """WIT package directory with documented world and functions."""
    directory = tmp_path / "wit"
    directory.mkdir()
    (directory / "world.wit").write_text(
        "/// Example package.\n"
        "package example:app@0.1.0;\n"
        "\n"
        "/// Top level.\n"
        "world app {\n"
        "  /// Runs it.\n"
        "  export run: func();\n"
        "  /// Host logger.\n"
        "  /// Second line.\n"
        "  import log: func(msg: string);\n"
        "  // not a doc comment\n"
        "  export undocumented: func();\n"
        "}\n",
        encoding="utf-8",
    )
    return directory
