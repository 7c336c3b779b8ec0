"""
Base renderer for package-docs output.

Provides what every text renderer needs: the display filters, a flattened
view of the tree in stored order, and Jinja2 template loading.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from witdocs.model import DocTree, FuncDocs

NO_WORLDS_MESSAGE = "No world documentation found"


class BaseRenderer(ABC):
    """Base class for documentation renderers.

    Manifesto:
        Renderers only format. They never change the tree; the
        ``show_worlds`` / ``show_functions`` switches decide what is
        printed, not what is stored.

    Architecture:
        ```
        DocTree ──► _world_views() ──► Jinja2 template ──► text
        ```

    Tags:
        - renderer
        - template
        - jinja2
    """

    # Template file name, empty for renderers that do not use one
    template_name: str = ""

    # Shown in place of missing docs
    placeholder: str = "(no documentation)"

    def __init__(
        self,
        tree: DocTree,
        *,
        show_worlds: bool = True,
        show_functions: bool = True,
        template_dir: Path | None = None,
    ):
        """Initialize the renderer.

        Args:
            tree: Documentation tree to render
            show_worlds: Include world headings and world docs
            show_functions: Include function sections
            template_dir: Directory containing templates
        """
        self.tree = tree
        self.show_worlds = show_worlds
        self.show_functions = show_functions

        if template_dir is None:
            template_dir = Path(__file__).parent.parent / "templates"
        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @abstractmethod
    def render(self) -> str:
        """Render the document.

        Returns:
            Rendered output, ending with a newline
        """

    def _docs_text(self, docs: str | None) -> str:
        return docs if docs is not None else self.placeholder

    def _function_views(self, functions: dict[str, FuncDocs]) -> list[dict[str, str]]:
        return [
            {"name": name, "text": self._docs_text(func.docs)}
            for name, func in functions.items()
        ]

    def _world_views(self) -> list[dict[str, Any]]:
        """Worlds in stored order, each with its non-empty function groups."""
        views = []
        for name, world in self.tree.worlds.items():
            groups = []
            for kind, functions in (
                ("exports", world.exported_functions()),
                ("imports", world.func_imports),
            ):
                if functions:
                    groups.append({"kind": kind, "functions": self._function_views(functions)})
            views.append({"name": name, "text": self._docs_text(world.docs), "groups": groups})
        return views

    def _render_template(self, **extra: Any) -> str:
        if not self.tree.worlds:
            return f"{NO_WORLDS_MESSAGE}\n"
        template = self.env.get_template(self.template_name)
        return template.render(
            worlds=self._world_views(),
            show_worlds=self.show_worlds,
            show_functions=self.show_functions,
            **extra,
        )
