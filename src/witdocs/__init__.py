"""
wit-docs - embed WIT documentation in WebAssembly components and read it back.

The injector stores a JSON documentation tree in the ``package-docs``
custom section of a component; the viewer decodes it and renders it as
JSON, a plain listing, markdown, or the component's WIT text with ``///``
comments woven back in.

Example:
    >>> from witdocs import codec, rewrite
    >>> from witdocs.model import DocTree
    >>> tree = DocTree.model_validate({"worlds": {"app": {"docs": "Top level."}}})
    >>> module = b"\\x00asm\\x01\\x00\\x00\\x00"
    >>> codec.extract(rewrite(module, codec.SECTION_NAME, codec.encode(tree))) == tree
    True
"""

__version__ = "0.1.0"

from witdocs import codec
from witdocs.errors import WitDocsError
from witdocs.injector import inject_docs
from witdocs.model import DocTree, FuncDocs, WorldDocs
from witdocs.wasm import parse_binary, rewrite

__all__ = [
    "DocTree",
    "FuncDocs",
    "WitDocsError",
    "WorldDocs",
    "codec",
    "inject_docs",
    "parse_binary",
    "rewrite",
    "__version__",
]
