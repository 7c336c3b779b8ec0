"""
package-docs section codec.

Encodes a ``DocTree`` into the payload of the ``package-docs`` custom
section and back, and finds that section inside a module binary.

Payload layout::

    ┌──────────────┬──────────────────────────────┐
    │ version: u8  │ DocTree as UTF-8 JSON        │
    └──────────────┴──────────────────────────────┘

The version byte is reserved so the payload shape can change later; this
reader skips it without checking it.

Examples:
    >>> from witdocs.model import DocTree
    >>> payload = encode(DocTree(worlds={}))
    >>> payload[0] == SECTION_VERSION
    True
    >>> decode(payload)
    DocTree(docs=None, worlds={})
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from witdocs.errors import DecodingError, EncodingError
from witdocs.logging import get_logger
from witdocs.model import DocTree
from witdocs.wasm.sections import ModuleBinary, parse_binary

logger = get_logger(__name__)

SECTION_NAME = "package-docs"
SECTION_VERSION = 1


def encode(tree: DocTree) -> bytes:
    """Serialize ``tree`` to a section payload.

    Raises:
        EncodingError: the tree holds values JSON cannot represent
    """
    try:
        body = json.dumps(tree.to_json_dict(), ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise EncodingError("cannot serialize documentation tree", cause=e).with_context(
            step="encode", section=SECTION_NAME
        ) from e
    return bytes([SECTION_VERSION]) + body.encode("utf-8")


def decode(data: bytes) -> DocTree:
    """Parse a section payload into a ``DocTree``.

    Raises:
        DecodingError: nothing follows the version byte, or the remainder is
            not JSON matching the doc schema
    """
    if len(data) <= 1:
        raise DecodingError("package-docs payload is empty").with_context(
            step="decode", section=SECTION_NAME
        )
    try:
        return DocTree.model_validate_json(data[1:])
    except ValidationError as e:
        raise DecodingError("package-docs payload is not a valid documentation tree", cause=e).with_context(
            step="decode", section=SECTION_NAME
        ) from e


def find(module: ModuleBinary | bytes, name: str = SECTION_NAME) -> bytes | None:
    """Return the data of the first custom section called ``name``.

    Later sections with the same name are ignored.

    Raises:
        ModuleFormatError: ``module`` is raw bytes that do not parse
    """
    if not isinstance(module, ModuleBinary):
        module = parse_binary(module)
    for custom in module.custom_sections():
        if custom.name == name:
            return custom.data
    return None


def extract(module_bytes: bytes) -> DocTree | None:
    """Find and decode the package-docs section of a binary.

    Returns ``None`` when the section is absent or carries nothing past its
    version byte.
    """
    data = find(module_bytes)
    if data is None:
        logger.debug("section.absent", section=SECTION_NAME)
        return None
    if len(data) <= 1:
        logger.debug("section.empty", section=SECTION_NAME, size=len(data))
        return None
    return decode(data)


__all__ = ["SECTION_NAME", "SECTION_VERSION", "encode", "decode", "find", "extract"]
