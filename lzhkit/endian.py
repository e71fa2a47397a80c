"""Decoding of fixed-width unsigned integers stored in archive headers."""

from __future__ import annotations

import struct

_U16_LE = struct.Struct("<H")
_U32_LE = struct.Struct("<I")
_U64_LE = struct.Struct("<Q")
_U16_BE = struct.Struct(">H")
_U32_BE = struct.Struct(">I")


def decode_uint16(buf, offset=0):
    """Decode a 16-bit little-endian unsigned integer at ``offset``."""
    return _U16_LE.unpack_from(buf, offset)[0]


def decode_uint32(buf, offset=0):
    """Decode a 32-bit little-endian unsigned integer at ``offset``."""
    return _U32_LE.unpack_from(buf, offset)[0]


def decode_uint64(buf, offset=0):
    """Decode a 64-bit little-endian unsigned integer at ``offset``."""
    return _U64_LE.unpack_from(buf, offset)[0]


def decode_be_uint16(buf, offset=0):
    """Decode a 16-bit big-endian unsigned integer at ``offset``."""
    return _U16_BE.unpack_from(buf, offset)[0]


def decode_be_uint32(buf, offset=0):
    """Decode a 32-bit big-endian unsigned integer at ``offset``."""
    return _U32_BE.unpack_from(buf, offset)[0]