"""Annotated WIT: the component's WIT text with docs woven back in."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from witdocs.injector import inject_docs
from witdocs.logging import get_logger
from witdocs.model import DocTree
from witdocs.renderers.base import BaseRenderer
from witdocs.toolchain import DEFAULT_WASM_TOOLS, component_wit

logger = get_logger(__name__)


class WitRenderer(BaseRenderer):
    """Render the component's WIT text with ``///`` doc comments.

    The WIT text is printed by ``wasm-tools component wit``; the display
    filters do not apply.
    """

    def __init__(
        self,
        tree: DocTree,
        *,
        component: Path,
        wasm_tools: str = DEFAULT_WASM_TOOLS,
        **kwargs: Any,
    ):
        super().__init__(tree, **kwargs)
        self.component = Path(component)
        self.wasm_tools = wasm_tools

    def render(self) -> str:
        wit_text = component_wit(self.component, self.wasm_tools)
        annotated = inject_docs(wit_text, self.tree)
        logger.debug("wit.annotated", component=str(self.component))
        return annotated
