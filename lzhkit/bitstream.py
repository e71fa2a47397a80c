"""Reading a byte stream as a sequence of bits, most significant first."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


class BitStreamReader:
    """Reads bit fields from a byte source.

    ``read`` is called with a maximum number of bytes and returns a bytes
    object; an empty result means the end of the input. Running out of
    input while reading raises :class:`EOFError`.
    """

    def __init__(self, read):
        self._read = read
        self._buffer = 0
        self._bits = 0

    def peek_bits(self, n):
        """Return the next ``n`` bits without consuming them."""
        if n < 0 or n > 32:
            raise ValueError(f"cannot peek {n} bits")
        if n == 0:
            return 0

        while self._bits < n:
            fill_bytes = (32 - self._bits) // 8
            chunk = self._read(fill_bytes) if fill_bytes else b""
            if not chunk:
                raise EOFError("end of bit stream")
            for byte in chunk[:fill_bytes]:
                self._buffer |= byte << (24 - self._bits)
                self._bits += 8

        return self._buffer >> (32 - n)

    def read_bits(self, n):
        """Consume and return the next ``n`` bits."""
        result = self.peek_bits(n)
        self._buffer = (self._buffer << n) & _MASK32
        self._bits -= n
        return result

    def read_bit(self):
        """Consume and return a single bit."""
        return self.read_bits(1)