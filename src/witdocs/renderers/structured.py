"""JSON renderer: the tree exactly as decoded, indented."""

from __future__ import annotations

import json

from witdocs.renderers.base import BaseRenderer


class StructuredRenderer(BaseRenderer):
    """Render the documentation tree as indented JSON.

    The display filters do not apply; the payload is passed through as is,
    including fields other renderers ignore.
    """

    def render(self) -> str:
        return json.dumps(self.tree.to_source_dict(), indent=2, ensure_ascii=False) + "\n"
