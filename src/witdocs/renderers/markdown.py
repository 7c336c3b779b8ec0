"""Markdown rendering of package-docs."""

from __future__ import annotations

from witdocs.renderers.base import BaseRenderer


class MarkdownRenderer(BaseRenderer):
    """Render one ``# World`` section per world and one ``###`` block per function.

    Tags:
        - renderer
        - markdown
    """

    template_name = "markdown.md.j2"
    placeholder = "*(no documentation)*"
    headings = {
        "exports": "Exported Functions",
        "imports": "Imported Functions",
    }

    def render(self) -> str:
        return self._render_template(headings=self.headings)
