"""
Module rewriter: structural round-trip plus one appended custom section.

Manifesto:
    The component we are handed is somebody else's build output. Every
    section we do not own goes back out exactly as it came in, in the same
    order, whether or not we know what it is. The only thing this module
    ever changes is the presence of custom sections with the managed name.

Guardrails:
    ❌ DON'T: Re-encode sections from a decoded form
    ✅ DO: Copy ``Section.raw`` verbatim

    ❌ DON'T: Fall back to "best effort" on a corrupt input
    ✅ DO: Raise RewriteError and write nothing

Tags:
    wasm, rewriter, custom-section, round-trip
"""

from __future__ import annotations

from witdocs.errors import EncodingError, ModuleFormatError, RewriteError
from witdocs.logging import get_logger
from witdocs.wasm.sections import ModuleBinary, encode_custom_section, parse_binary, read_custom_section

logger = get_logger(__name__)


def _parse_for_rewrite(original: bytes) -> ModuleBinary:
    try:
        return parse_binary(original)
    except ModuleFormatError as e:
        raise RewriteError(
            f"input is not a structurally valid WebAssembly binary: {e.message}", cause=e
        ).with_context(step="rewrite") from e


def rewrite(
    original: bytes,
    name: str,
    data: bytes,
    *,
    replace_existing: bool = False,
) -> bytes:
    """Copy ``original`` section by section and append one custom section.

    Args:
        original: Module or component binary
        name: Name of the custom section to append
        data: Custom section payload
        replace_existing: Drop custom sections already named ``name``
            before appending. With the default, a second rewrite leaves two
            sections of that name and readers only see the first.

    Returns:
        The rewritten binary.

    Raises:
        RewriteError: ``original`` cannot be parsed structurally
    """
    module = _parse_for_rewrite(original)

    kept = []
    dropped = 0
    for section in module.sections:
        if replace_existing and section.is_custom and read_custom_section(section).name == name:
            dropped += 1
            continue
        kept.append(section.raw)

    try:
        appended = encode_custom_section(name, data)
    except ValueError as e:
        raise EncodingError(f"custom section {name!r} is too large to encode", cause=e).with_context(
            step="rewrite", section=name
        ) from e

    logger.debug(
        "section.appended",
        kind=module.kind.value,
        name=name,
        size=len(data),
        sections_kept=len(kept),
        sections_dropped=dropped,
    )
    return module.header + b"".join(kept) + appended


__all__ = ["rewrite"]
