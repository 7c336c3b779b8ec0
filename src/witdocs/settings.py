"""Environment-driven settings for the wit-docs commands.

All fields can be set via ``WITDOCS_*`` environment variables (e.g.
``WITDOCS_WASM_TOOLS=/opt/bin/wasm-tools``) or a ``.env`` file in the
working directory. Command-line flags override whatever is loaded here.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WitDocsSettings(BaseSettings):
    """Settings shared by ``wit-docs-inject`` and ``wit-docs-view``.

    Fields
    ──────
    wasm_tools        : Executable used to print a component's WIT text
    log_level         : Structlog log level
    log_format        : ``console`` or ``json`` log rendering
    replace_existing  : Drop older package-docs sections when injecting
    """

    model_config = SettingsConfigDict(
        env_prefix="WITDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Toolchain ────────────────────────────────────────────────
    wasm_tools: str = Field(default="wasm-tools", description="wasm-tools executable name or path")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: Literal["console", "json"] = Field(default="console")

    # ── Injection ────────────────────────────────────────────────
    replace_existing: bool = Field(
        default=True,
        description="Remove prior package-docs sections before appending a new one",
    )


_settings: WitDocsSettings | None = None


def get_settings(*, _force_reload: bool = False) -> WitDocsSettings:
    """Load and cache a :class:`WitDocsSettings` instance."""
    global _settings
    if _settings is None or _force_reload:
        _settings = WitDocsSettings()
    return _settings


__all__ = ["WitDocsSettings", "get_settings"]
