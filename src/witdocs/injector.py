"""
Weave package-docs back into a component's WIT text.

The WIT text comes from an external printer and is never parsed. A
two-state line scanner recognizes exactly two shapes and inserts ``///``
comment lines in front of them:

    - a world header:          ``world <name> {``
    - a world-level function:  ``export <name>: func(...)`` / ``import <name>: ...``

Manifesto:
    The printer's output is not ours to validate. Anything the scanner
    does not recognize is copied through untouched and gets no docs.
    Matching is by prefix and first colon only.

Architecture:
    ::

        ┌──────────────┐  "world <name> ..."   ┌──────────────────┐
        │  TOP LEVEL   │ ────────────────────► │   WORLD BODY     │
        │ copy through │                       │ export/import →  │
        │              │ ◄──────────────────── │ docs + the line  │
        └──────────────┘   line == "}"         └──────────────────┘
                           (emitted, inclusive)

Name resolution:
    1. Exact world name.
    2. Otherwise, if the tree has exactly one world, that world (printers
       may name the world differently from the documented package).
    3. Otherwise nothing; never an error.

    Within a world, function docs come from the exports collection
    (``func_exports``, else its legacy alias ``functions``).

Examples:
    >>> from witdocs.model import DocTree
    >>> tree = DocTree.model_validate(
    ...     {"worlds": {"app": {"docs": "Top level.",
    ...                         "func_exports": {"run": {"docs": "Runs it."}}}}})
    >>> print(inject_docs("world app {\\n  export run: func();\\n}", tree), end="")
    /// Top level.
    world app {
      /// Runs it.
      export run: func();
    }

Tags:
    wit, docs, text-injection, scanner
"""

from __future__ import annotations

from enum import Enum

from witdocs.model import DocTree, WorldDocs

WORLD_KEYWORD = "world "
FUNCTION_KEYWORDS = ("export ", "import ")
WORLD_END = "}"
DOC_PREFIX = "/// "
UNKNOWN_WORLD = "unknown"


class ScanState(str, Enum):
    TOP_LEVEL = "top-level"
    WORLD_BODY = "world-body"


# =============================================================================
# Name resolution
# =============================================================================


def resolve_world(tree: DocTree, world_name: str) -> WorldDocs | None:
    """Exact world match, else the single-world fallback, else ``None``."""
    world = tree.worlds.get(world_name)
    if world is not None:
        return world
    return single_world_fallback(tree)


def single_world_fallback(tree: DocTree) -> WorldDocs | None:
    """The only world of a one-world tree; ``None`` for zero or several."""
    if len(tree.worlds) == 1:
        return next(iter(tree.worlds.values()))
    return None


def resolve_world_docs(tree: DocTree, world_name: str) -> str | None:
    world = resolve_world(tree, world_name)
    return world.docs if world is not None else None


def resolve_function_docs(tree: DocTree, world_name: str, func_name: str) -> str | None:
    """Docs of ``func_name`` in the exports collection of the resolved world."""
    world = resolve_world(tree, world_name)
    if world is None:
        return None
    func = world.exported_functions().get(func_name)
    return func.docs if func is not None else None


# =============================================================================
# Line helpers
# =============================================================================


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, drop a trailing ``\\r`` per line, no empty last line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_world_name(line: str) -> str:
    """Second whitespace token of a world header, or ``"unknown"``."""
    parts = line.split()
    return parts[1] if len(parts) >= 2 else UNKNOWN_WORLD


def extract_function_name(line: str) -> str | None:
    """Second whitespace token before the first colon, if there is one."""
    colon = line.find(":")
    if colon < 0:
        return None
    parts = line[:colon].split()
    return parts[1] if len(parts) >= 2 else None


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def doc_comment_lines(docs: str, indent: str = "") -> list[str]:
    return [f"{indent}{DOC_PREFIX}{doc_line}" for doc_line in split_lines(docs)]


# =============================================================================
# Scanner
# =============================================================================


def inject_docs(wit_text: str, tree: DocTree) -> str:
    """Return ``wit_text`` with doc comments before documented declarations.

    Every output line, including the last, ends with ``\\n``. Never raises
    on unrecognized text.
    """
    out: list[str] = []
    state = ScanState.TOP_LEVEL
    world_name = UNKNOWN_WORLD

    for line in split_lines(wit_text):
        trimmed = line.strip()

        if state is ScanState.TOP_LEVEL:
            if trimmed.startswith(WORLD_KEYWORD):
                world_name = extract_world_name(trimmed)
                world_docs = resolve_world_docs(tree, world_name)
                if world_docs is not None:
                    out.extend(doc_comment_lines(world_docs))
                state = ScanState.WORLD_BODY
            out.append(line)
            continue

        if trimmed.startswith(FUNCTION_KEYWORDS):
            func_name = extract_function_name(trimmed)
            if func_name is not None:
                func_docs = resolve_function_docs(tree, world_name, func_name)
                if func_docs is not None:
                    out.extend(doc_comment_lines(func_docs, leading_whitespace(line)))
        out.append(line)
        if trimmed == WORLD_END:
            state = ScanState.TOP_LEVEL

    return "".join(f"{line}\n" for line in out)


__all__ = [
    "ScanState",
    "resolve_world",
    "single_world_fallback",
    "resolve_world_docs",
    "resolve_function_docs",
    "split_lines",
    "extract_world_name",
    "extract_function_name",
    "leading_whitespace",
    "inject_docs",
]
