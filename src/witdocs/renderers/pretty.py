"""Terminal listing of world and function docs."""

from __future__ import annotations

from witdocs.renderers.base import BaseRenderer


class PrettyRenderer(BaseRenderer):
    """Render a compact, emoji-marked listing.

    Examples:
        >>> from witdocs.model import DocTree
        >>> tree = DocTree.model_validate({"worlds": {"app": {"docs": "Top level."}}})
        >>> print(PrettyRenderer(tree).render(), end="")
        🌍 World: app
           📝 Top level.
        <BLANKLINE>
    """

    template_name = "pretty.txt.j2"
    headings = {
        "exports": "📤 Exported Functions:",
        "imports": "📥 Imported Functions:",
    }

    def render(self) -> str:
        return self._render_template(headings=self.headings)
