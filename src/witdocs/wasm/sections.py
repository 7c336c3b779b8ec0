"""
Structural reader for WebAssembly module and component binaries.

Only the framing is interpreted: the 8-byte preamble and the
``(id, size, payload)`` envelope of every top-level section. Section
contents stay opaque, except custom sections (id 0) whose name is decoded
so callers can find the one they manage. Each section keeps its raw bytes
exactly as stored, so ``ModuleBinary.to_bytes()`` reproduces the input
byte-for-byte, whatever section ids or LEB128 padding it contains.

Architecture:
    ::

        ┌──────────┬──────────┬────────────────────────────────────────┐
        │ \\0asm    │ version  │ section*                               │
        │ 4 bytes  │ 4 bytes  │ id:u8 │ size:u32 LEB128 │ payload      │
        └──────────┴──────────┴────────────────────────────────────────┘

        module:     version = 01 00 00 00
        component:  version = 0d 00, layer = 01 00

        custom section payload: name_len:u32 │ name (UTF-8) │ data

Tags:
    wasm, binary-format, custom-section, component-model
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from witdocs.errors import ModuleFormatError
from witdocs.wasm.leb128 import decode_u32, encode_u32

MAGIC = b"\x00asm"
MODULE_VERSION = b"\x01\x00\x00\x00"
COMPONENT_VERSION = b"\x0d\x00\x01\x00"
HEADER_SIZE = 8
CUSTOM_SECTION_ID = 0


class BinaryKind(str, Enum):
    """What the preamble says the binary is."""

    MODULE = "module"
    COMPONENT = "component"


@dataclass(frozen=True)
class Section:
    """One top-level section, kept exactly as it was stored.

    Attributes:
        id: Section id byte
        offset: Offset of the id byte in the containing binary
        raw: id byte, size field and payload, verbatim
        payload_start: Index into ``raw`` where the payload begins
    """

    id: int
    offset: int
    raw: bytes
    payload_start: int

    @property
    def payload(self) -> bytes:
        return self.raw[self.payload_start:]

    @property
    def is_custom(self) -> bool:
        return self.id == CUSTOM_SECTION_ID


@dataclass(frozen=True)
class CustomSection:
    """Decoded view of a custom section."""

    name: str
    data: bytes
    section: Section


@dataclass(frozen=True)
class ModuleBinary:
    """A parsed module or component: preamble plus ordered sections."""

    kind: BinaryKind
    header: bytes
    sections: tuple[Section, ...]

    def to_bytes(self) -> bytes:
        """Re-emit the binary; identical to the parsed input."""
        return self.header + b"".join(section.raw for section in self.sections)

    def custom_sections(self) -> Iterator[CustomSection]:
        """Yield custom sections in stored order."""
        for section in self.sections:
            if section.is_custom:
                yield read_custom_section(section)


def _read_header(data: bytes) -> tuple[BinaryKind, bytes]:
    if len(data) < HEADER_SIZE:
        raise ModuleFormatError("binary too short for a WebAssembly preamble", offset=0)
    if data[:4] != MAGIC:
        raise ModuleFormatError("missing WebAssembly magic number", offset=0)
    version = data[4:HEADER_SIZE]
    if version == MODULE_VERSION:
        return BinaryKind.MODULE, data[:HEADER_SIZE]
    if version == COMPONENT_VERSION:
        return BinaryKind.COMPONENT, data[:HEADER_SIZE]
    raise ModuleFormatError(f"unsupported WebAssembly version/layer {version.hex()}", offset=4)


def read_custom_section(section: Section) -> CustomSection:
    """Decode the name and data of a custom section."""
    payload = section.payload
    name_len, pos = decode_u32(payload, 0)
    end = pos + name_len
    if end > len(payload):
        raise ModuleFormatError(
            "custom section name extends past the end of the section",
            offset=section.offset,
        )
    try:
        name = payload[pos:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ModuleFormatError(
            "custom section name is not valid UTF-8", offset=section.offset, cause=e
        ) from e
    return CustomSection(name=name, data=payload[end:], section=section)


def parse_binary(data: bytes) -> ModuleBinary:
    """Split a module or component binary into its top-level sections.

    Raises:
        ModuleFormatError: bad preamble, truncated section, malformed size
            field, or a malformed custom section name
    """
    data = bytes(data)
    kind, header = _read_header(data)
    sections: list[Section] = []
    pos = HEADER_SIZE
    while pos < len(data):
        start = pos
        section_id = data[pos]
        size, payload_pos = decode_u32(data, pos + 1)
        end = payload_pos + size
        if end > len(data):
            raise ModuleFormatError(
                f"section {section_id} extends past the end of the binary", offset=start
            )
        section = Section(
            id=section_id,
            offset=start,
            raw=data[start:end],
            payload_start=payload_pos - start,
        )
        if section.is_custom:
            read_custom_section(section)
        sections.append(section)
        pos = end
    return ModuleBinary(kind=kind, header=header, sections=tuple(sections))


def encode_custom_section(name: str, data: bytes) -> bytes:
    """Encode a complete custom section (id, size and payload)."""
    name_bytes = name.encode("utf-8")
    payload = encode_u32(len(name_bytes)) + name_bytes + bytes(data)
    return bytes([CUSTOM_SECTION_ID]) + encode_u32(len(payload)) + payload


__all__ = [
    "MAGIC",
    "MODULE_VERSION",
    "COMPONENT_VERSION",
    "BinaryKind",
    "Section",
    "CustomSection",
    "ModuleBinary",
    "parse_binary",
    "read_custom_section",
    "encode_custom_section",
]
