"""Decoding of the extended header blocks found in level 1+ headers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .endian import decode_uint16, decode_uint32, decode_uint64

_TEXT_ENCODING = "latin-1"


class ExtHeaderType(enum.IntEnum):
    """Extended header type numbers."""

    COMMON = 0x00
    FILENAME = 0x01
    PATH = 0x02
    MULTI_DISC = 0x39
    COMMENT = 0x3F
    WINDOWS_TIMESTAMPS = 0x41
    UNIX_PERMISSION = 0x50
    UNIX_UID_GID = 0x51
    UNIX_GROUP = 0x52
    UNIX_USER = 0x53
    UNIX_TIMESTAMP = 0x54
    OS9 = 0xCC


class ExtraFlags(enum.IntFlag):
    """Which optional fields have been decoded."""

    NONE = 0
    UNIX_PERMS = enum.auto()
    UNIX_UID_GID = enum.auto()
    OS9_PERMS = enum.auto()
    COMMON_CRC = enum.auto()
    WINDOWS_TIMESTAMPS = enum.auto()


class ExtHeaderError(ValueError):
    """An extended header could not be decoded."""


@dataclass
class ExtendedFields:
    """File header fields that extended headers can set."""

    filename: str | None = None
    path: str | None = None
    timestamp: int = 0
    extra_flags: ExtraFlags = ExtraFlags.NONE
    common_crc: int = 0
    unix_perms: int = 0
    unix_uid: int = 0
    unix_gid: int = 0
    unix_username: str | None = None
    unix_group: str | None = None
    os9_perms: int = 0
    win_creation_time: int = 0
    win_modification_time: int = 0
    win_access_time: int = 0


def _text(raw):
    return bytes(raw).split(b"\x00", 1)[0].decode(_TEXT_ENCODING)


def _common(fields, data):
    fields.extra_flags |= ExtraFlags.COMMON_CRC
    fields.common_crc = decode_uint16(data)
    # The CRC covers the header with this field zeroed, so blank it in place.
    data[0:2] = b"\x00\x00"


def _filename(fields, data):
    # A path separator in the name could escape the extraction directory.
    fields.filename = _text(data).replace("/", "_")


def _path(fields, data):
    raw = bytes(data)
    # Some archivers omit the trailing separator.
    if raw[-1] != 0xFF:
        raw += b"\xff"
    fields.path = _text(raw.replace(b"\xff", b"/"))


def _windows_timestamps(fields, data):
    fields.extra_flags |= ExtraFlags.WINDOWS_TIMESTAMPS
    fields.win_creation_time = decode_uint64(data, 0)
    fields.win_modification_time = decode_uint64(data, 8)
    fields.win_access_time = decode_uint64(data, 16)


def _unix_perms(fields, data):
    fields.extra_flags |= ExtraFlags.UNIX_PERMS
    fields.unix_perms = decode_uint16(data)


def _unix_uid_gid(fields, data):
    fields.extra_flags |= ExtraFlags.UNIX_UID_GID
    fields.unix_gid = decode_uint16(data, 0)
    fields.unix_uid = decode_uint16(data, 2)


def _unix_username(fields, data):
    fields.unix_username = _text(data)


def _unix_group(fields, data):
    fields.unix_group = _text(data)


def _unix_timestamp(fields, data):
    fields.timestamp = decode_uint32(data)


def _os9(fields, data):
    fields.os9_perms = decode_uint16(data, 7)
    fields.extra_flags |= ExtraFlags.OS9_PERMS


_DECODERS = {
    ExtHeaderType.COMMON: (_common, 2),
    ExtHeaderType.FILENAME: (_filename, 1),
    ExtHeaderType.PATH: (_path, 1),
    ExtHeaderType.UNIX_PERMISSION: (_unix_perms, 2),
    ExtHeaderType.UNIX_UID_GID: (_unix_uid_gid, 4),
    ExtHeaderType.UNIX_USER: (_unix_username, 1),
    ExtHeaderType.UNIX_GROUP: (_unix_group, 1),
    ExtHeaderType.UNIX_TIMESTAMP: (_unix_timestamp, 4),
    ExtHeaderType.WINDOWS_TIMESTAMPS: (_windows_timestamps, 24),
    ExtHeaderType.OS9: (_os9, 12),
}


def decode_ext_header(fields, num, data):
    """Decode one extended header block of type ``num`` into ``fields``.

    ``data`` must be writable (a bytearray or memoryview) for the common
    header, whose CRC field is zeroed in place. Raises
    :class:`ExtHeaderError` for unsupported types or blocks that are too
    short.
    """
    entry = _DECODERS.get(num)
    if entry is None:
        raise ExtHeaderError(f"unsupported extended header type 0x{num:02x}")
    decoder, min_len = entry
    if len(data) < min_len:
        raise ExtHeaderError(
            f"extended header 0x{num:02x} too short: {len(data)} < {min_len}"
        )
    decoder(fields, data)