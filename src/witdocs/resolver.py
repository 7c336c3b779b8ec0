"""
Documentation sources for the injector.

The injector needs a package id and a ``DocTree``. They come either from a
WIT source directory, read by ``WitSourceScanner``, or from a doc file
(JSON or YAML) that already holds a tree, read by ``load_doc_file``. Any
object with a matching ``resolve(wit_dir)`` method can stand in for the
scanner.

Example:
    >>> scanner = WitSourceScanner()
    >>> resolved = scanner.resolve(Path("wit"))
    >>> resolved.package_id
    'example:app@0.1.0'
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import ValidationError

from witdocs.errors import StorageError, WitSourceError
from witdocs.logging import get_logger
from witdocs.model import DocTree

logger = get_logger(__name__)

_PACKAGE_RE = re.compile(r"^package\s+([^;\s{]+)\s*;")
_WORLD_RE = re.compile(r"^world\s+(%?[A-Za-z0-9_-]+)")
_FUNC_RE = re.compile(r"^(export|import)\s+(%?[A-Za-z0-9_-]+)\s*:\s*(?:async\s+)?func\b")


@dataclass
class ResolvedPackage:
    """Result of resolving a documentation source.

    Attributes:
        package_id: ``namespace:name[@version]`` of the documented package
        docs: Extracted documentation tree
        sources: Files the docs were read from
    """

    package_id: str
    docs: DocTree
    sources: list[Path] = field(default_factory=list)


class WitResolver(Protocol):
    """Anything that turns a WIT directory into a ResolvedPackage."""

    def resolve(self, wit_dir: Path) -> ResolvedPackage: ...


@dataclass
class _WorldBuilder:
    docs: str | None = None
    func_exports: dict[str, dict[str, str]] = field(default_factory=dict)
    func_imports: dict[str, dict[str, str]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.docs is None and not self.func_exports and not self.func_imports

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.docs is not None:
            data["docs"] = self.docs
        if self.func_exports:
            data["func_exports"] = self.func_exports
        if self.func_imports:
            data["func_imports"] = self.func_imports
        return data


class WitSourceScanner:
    """Collect ``///`` doc comments from the ``*.wit`` files of a directory.

    Manifesto:
        The injector only re-weaves world and world-level function docs,
        so that is all this scanner extracts. It reads declarations line
        by line, tracking brace depth, and attaches the doc comments that
        precede a ``package``, ``world`` or ``export|import <name>: func``
        line to it.

    Guardrails:
        - Do NOT treat ``//`` or ``/* */`` comments as docs
        - Do NOT record undocumented functions
          ✅ Worlds without any docs are omitted as well
        - Do NOT descend into ``deps/``
          ✅ Only the package's own files are documented

    Tags:
        - resolver
        - wit
        - doc_extraction
    """

    def resolve(self, wit_dir: Path) -> ResolvedPackage:
        """Scan ``wit_dir`` and build its documentation tree.

        Raises:
            WitSourceError: no ``.wit`` files, or no package declaration
            StorageError: a file cannot be read
        """
        wit_dir = Path(wit_dir)
        if not wit_dir.is_dir():
            raise WitSourceError(f"WIT directory does not exist: {wit_dir}").with_context(
                path=str(wit_dir), step="resolve"
            )

        sources = sorted(p for p in wit_dir.glob("*.wit") if p.is_file())
        if not sources:
            raise WitSourceError(f"no .wit files in {wit_dir}").with_context(
                path=str(wit_dir), step="resolve"
            )

        package_id: str | None = None
        package_docs: str | None = None
        worlds: dict[str, _WorldBuilder] = {}

        for source in sources:
            try:
                text = source.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise StorageError(f"cannot read {source}", cause=e).with_context(
                    path=str(source), step="resolve"
                ) from e
            file_package, file_docs = self._scan_file(text, worlds)
            if file_package is not None and package_id is None:
                package_id = file_package
            if file_docs is not None and package_docs is None:
                package_docs = file_docs

        if package_id is None:
            raise WitSourceError(f"no package declaration found in {wit_dir}").with_context(
                path=str(wit_dir), step="resolve"
            )

        tree_data: dict[str, Any] = {
            "worlds": {name: w.to_dict() for name, w in worlds.items() if not w.is_empty()}
        }
        if package_docs is not None:
            tree_data["docs"] = package_docs

        logger.info(
            "wit.resolved",
            package=package_id,
            files=len(sources),
            worlds=len(tree_data["worlds"]),
        )
        return ResolvedPackage(
            package_id=package_id,
            docs=DocTree.model_validate(tree_data),
            sources=sources,
        )

    def _scan_file(
        self, text: str, worlds: dict[str, _WorldBuilder]
    ) -> tuple[str | None, str | None]:
        package_id: str | None = None
        package_docs: str | None = None
        pending: list[str] = []
        depth = 0
        world: _WorldBuilder | None = None

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if line.startswith("///"):
                pending.append(_doc_text(line))
                continue
            code = _strip_comment(line)
            if not code:
                continue

            docs = "\n".join(pending) if pending else None
            pending = []

            if depth == 0:
                package_match = _PACKAGE_RE.match(code)
                world_match = _WORLD_RE.match(code)
                if package_match:
                    package_id = package_match.group(1)
                    package_docs = docs
                    world = None
                elif world_match:
                    name = world_match.group(1).lstrip("%")
                    world = worlds.setdefault(name, _WorldBuilder())
                    if docs is not None:
                        world.docs = docs
                elif not code.startswith("{"):
                    world = None
            elif depth == 1 and world is not None:
                func_match = _FUNC_RE.match(code)
                if func_match and docs is not None:
                    direction, name = func_match.group(1), func_match.group(2).lstrip("%")
                    target = world.func_exports if direction == "export" else world.func_imports
                    target[name] = {"docs": docs}

            previous = depth
            depth = max(depth + code.count("{") - code.count("}"), 0)
            if previous > 0 and depth == 0:
                world = None

        return package_id, package_docs


def _doc_text(line: str) -> str:
    text = line[3:]
    if text.startswith(" "):
        text = text[1:]
    return text.rstrip()


def _strip_comment(line: str) -> str:
    index = line.find("//")
    if index >= 0:
        line = line[:index]
    return line.strip()


def load_doc_file(path: Path) -> DocTree:
    """Load a documentation tree from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        StorageError: the file cannot be read
        WitSourceError: the content is not a documentation tree
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"cannot read {path}", cause=e).with_context(
            path=str(path), step="load-docs"
        ) from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
        return DocTree.model_validate(data)
    except (yaml.YAMLError, json.JSONDecodeError, ValidationError) as e:
        raise WitSourceError(f"{path} is not a valid documentation tree", cause=e).with_context(
            path=str(path), step="load-docs"
        ) from e


__all__ = ["ResolvedPackage", "WitResolver", "WitSourceScanner", "load_doc_file"]
