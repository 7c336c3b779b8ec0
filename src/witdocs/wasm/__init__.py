"""
WebAssembly binary handling: section framing and the append-only rewriter.
"""

from witdocs.wasm.rewriter import rewrite
from witdocs.wasm.sections import (
    BinaryKind,
    CustomSection,
    ModuleBinary,
    Section,
    encode_custom_section,
    parse_binary,
)

__all__ = [
    "BinaryKind",
    "CustomSection",
    "ModuleBinary",
    "Section",
    "encode_custom_section",
    "parse_binary",
    "rewrite",
]
