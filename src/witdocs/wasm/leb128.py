"""Unsigned LEB128 helpers for the WebAssembly ``u32`` encoding."""

from __future__ import annotations

from witdocs.errors import ModuleFormatError

U32_MAX = 0xFFFF_FFFF
# ceil(32 / 7)
MAX_U32_BYTES = 5


def encode_u32(value: int) -> bytes:
    """Encode ``value`` as minimal unsigned LEB128."""
    if value < 0 or value > U32_MAX:
        raise ValueError(f"value out of u32 range: {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_u32(data: bytes, offset: int) -> tuple[int, int]:
    """Decode a ``u32`` starting at ``offset``.

    Returns ``(value, next_offset)``. Non-minimal encodings are accepted,
    as the binary format allows them.

    Raises:
        ModuleFormatError: truncated input, more than five bytes, or a
            value that does not fit in 32 bits
    """
    result = 0
    shift = 0
    pos = offset
    for index in range(MAX_U32_BYTES):
        if pos >= len(data):
            raise ModuleFormatError("unexpected end of data in LEB128 integer", offset=offset)
        byte = data[pos]
        pos += 1
        if index == MAX_U32_BYTES - 1 and byte & 0x70:
            raise ModuleFormatError("LEB128 integer too large for u32", offset=offset)
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
    raise ModuleFormatError("LEB128 integer representation too long", offset=offset)


__all__ = ["U32_MAX", "encode_u32", "decode_u32"]
