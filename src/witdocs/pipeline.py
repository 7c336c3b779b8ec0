"""
Injector and viewer pipelines.

Injector::

    resolver / doc file ──► codec.encode ──► wasm.rewrite ──► write file

Viewer::

    read file ──► wasm.parse_binary ──► codec.find / codec.decode ──► DocTree | None

Each run is a pure function of its input files. Files are read whole;
outputs are written to a temporary file next to the destination and moved
into place, so a failed run never leaves a half-written component behind.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from witdocs import codec
from witdocs.errors import ConfigError, ModuleFormatError, StorageError, WitDocsError
from witdocs.logging import get_logger
from witdocs.model import DocTree
from witdocs.resolver import WitResolver, WitSourceScanner, load_doc_file
from witdocs.wasm import rewrite

logger = get_logger(__name__)

DOCS_SUFFIX = ".docs.wasm"
FALLBACK_SUFFIX = ".docs.injected.wasm"


@dataclass
class InjectionResult:
    """Outcome of an injection run."""

    output_path: Path
    package_id: str | None
    payload_size: int
    world_count: int


# =============================================================================
# File helpers
# =============================================================================


def read_component(path: Path) -> bytes:
    """Read a whole component file."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise StorageError(f"cannot read {path}", cause=e).with_context(
            path=str(path), step="read"
        ) from e
    logger.debug("component.read", path=str(path), size=len(data))
    return data


def write_component(path: Path, data: bytes) -> None:
    """Atomically replace ``path`` with ``data``."""
    path = Path(path)
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise StorageError(f"cannot write {path}", cause=e).with_context(
            path=str(path), step="write"
        ) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
    logger.debug("component.written", path=str(path), size=len(data))


def derive_output_path(
    component: Path,
    out: Path | None = None,
    inplace: bool = False,
) -> Path:
    """Where an injection run writes its result.

    ``inplace`` wins, then ``out``; otherwise ``<stem>.docs.wasm`` next to
    the input, or ``<stem>.docs.injected.wasm`` if that would be the input
    itself.
    """
    component = Path(component)
    if inplace:
        return component
    if out is not None:
        return Path(out)
    derived = component.with_name(f"{component.stem}{DOCS_SUFFIX}")
    if derived == component:
        derived = component.with_name(f"{component.stem}{FALLBACK_SUFFIX}")
    return derived


# =============================================================================
# Injector
# =============================================================================


def inject_component(
    component: Path,
    *,
    wit_dir: Path | None = None,
    docs_file: Path | None = None,
    out: Path | None = None,
    inplace: bool = False,
    replace_existing: bool = True,
    resolver: WitResolver | None = None,
) -> InjectionResult:
    """Embed documentation into ``component`` and write the result.

    Exactly one of ``wit_dir`` and ``docs_file`` names the documentation
    source.

    Raises:
        ConfigError: invalid option combination
        WitDocsError: any read, resolve, encode, rewrite or write failure
    """
    if (wit_dir is None) == (docs_file is None):
        raise ConfigError("exactly one of a WIT directory or a doc file is required")
    if inplace and out is not None:
        raise ConfigError("--out and --inplace are mutually exclusive")

    component = Path(component)
    original = read_component(component)

    package_id: str | None = None
    if wit_dir is not None:
        resolved = (resolver or WitSourceScanner()).resolve(Path(wit_dir))
        package_id = resolved.package_id
        tree = resolved.docs
    else:
        tree = load_doc_file(Path(docs_file))

    payload = codec.encode(tree)
    try:
        rewritten = rewrite(
            original,
            codec.SECTION_NAME,
            payload,
            replace_existing=replace_existing,
        )
    except WitDocsError as e:
        e.with_context(path=str(component))
        raise

    output_path = derive_output_path(component, out, inplace)
    write_component(output_path, rewritten)

    logger.info(
        "docs.injected",
        output=str(output_path),
        package=package_id,
        payload_size=len(payload),
        worlds=len(tree.worlds),
    )
    return InjectionResult(
        output_path=output_path,
        package_id=package_id,
        payload_size=len(payload),
        world_count=len(tree.worlds),
    )


# =============================================================================
# Viewer
# =============================================================================


def load_component_docs(component: Path) -> DocTree | None:
    """Read ``component`` and decode its package-docs section.

    Returns ``None`` when the section is absent or empty.

    Raises:
        StorageError: the file cannot be read
        ParseError: the binary or the payload is malformed
    """
    data = read_component(component)
    try:
        return codec.extract(data)
    except ModuleFormatError as e:
        e.with_context(path=str(component), step="parse")
        raise
    except WitDocsError as e:
        e.with_context(path=str(component))
        raise


__all__ = [
    "DOCS_SUFFIX",
    "FALLBACK_SUFFIX",
    "InjectionResult",
    "read_component",
    "write_component",
    "derive_output_path",
    "inject_component",
    "load_component_docs",
]
