"""CRC-16 (reflected polynomial 0xA001) as used by LHA archives."""

from __future__ import annotations


def _build_table():
    table = []
    for index in range(256):
        crc = index
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE = _build_table()


def crc16(data, crc=0):
    """Return the CRC-16 of ``data``, continuing from ``crc``."""
    for byte in bytes(data):
        crc = ((crc >> 8) ^ _TABLE[(crc ^ byte) & 0xFF]) & 0xFFFF
    return crc


class Crc16:
    """Running CRC-16 over data supplied in pieces."""

    def __init__(self, value=0):
        self.value = value & 0xFFFF

    def update(self, data):
        """Fold ``data`` into the running CRC and return the new value."""
        self.value = crc16(data, self.value)
        return self.value

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"Crc16(0x{self.value:04x})"