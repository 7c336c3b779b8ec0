"""
Renderers for decoded package-docs.

Every renderer takes a ``DocTree`` and returns text. ``OutputFormat`` maps
the command-line ``--format`` values to renderer classes.
"""

from enum import Enum

from witdocs.renderers.base import BaseRenderer
from witdocs.renderers.markdown import MarkdownRenderer
from witdocs.renderers.pretty import PrettyRenderer
from witdocs.renderers.structured import StructuredRenderer
from witdocs.renderers.wit import WitRenderer


class OutputFormat(str, Enum):
    PRETTY = "pretty"
    JSON = "json"
    MARKDOWN = "markdown"
    WIT = "wit"


RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.PRETTY: PrettyRenderer,
    OutputFormat.JSON: StructuredRenderer,
    OutputFormat.MARKDOWN: MarkdownRenderer,
    OutputFormat.WIT: WitRenderer,
}

__all__ = [
    "BaseRenderer",
    "MarkdownRenderer",
    "OutputFormat",
    "PrettyRenderer",
    "RENDERERS",
    "StructuredRenderer",
    "WitRenderer",
]
