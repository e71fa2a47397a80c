"""Decompression of a single archived stream, with CRC and progress tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .crc16 import Crc16
from .lh1 import LH1Decoder


class UnknownMethodError(LookupError):
    """No decoder exists for the requested compression method."""


@dataclass(frozen=True)
class DecoderType:
    """A compression method and how to build a decoder for it.

    ``factory`` is called with a ``read(max_bytes) -> bytes`` function and
    returns an object whose ``read()`` method yields the bytes produced by
    the next decoded command, or an empty bytes object at the end.
    ``block_size`` is the unit used for progress reporting.
    """

    name: str
    factory: Callable
    max_read: int
    block_size: int


_DECODER_TYPES = {
    dtype.name: dtype
    for dtype in (
        DecoderType("-lh1-", LH1Decoder, LH1Decoder.MAX_READ,
                    LH1Decoder.BLOCK_SIZE),
    )
}


def decoder_for_name(name):
    """Return the :class:`DecoderType` for a method name such as ``-lh1-``."""
    try:
        return _DECODER_TYPES[name]
    except KeyError:
        raise UnknownMethodError(
            f"unknown compression method {name!r}") from None


class Decoder:
    """Decompresses a stream of known length.

    Output is truncated at exactly ``stream_length`` bytes. A running CRC-16
    of everything returned is kept, and an optional progress callback is
    told each time another block of output has been produced.
    """

    def __init__(self, dtype, read, stream_length):
        self._dtype = dtype
        self._impl = dtype.factory(read)
        self._stream_length = stream_length
        self._stream_pos = 0
        self._outbuf = b""
        self._outbuf_pos = 0
        self._failed = False
        self._crc = Crc16()
        self._progress = None
        self._last_block = -1
        self._total_blocks = 0

    @property
    def stream_length(self):
        """Expected length of the decompressed stream."""
        return self._stream_length

    def _check_progress(self):
        block_size = self._dtype.block_size
        block = (self._stream_pos + block_size - 1) // block_size
        while self._last_block != block:
            self._last_block += 1
            self._progress(self._last_block, self._total_blocks)

    def monitor(self, callback):
        """Report progress as ``callback(blocks_done, total_blocks)``.

        The callback is invoked at once for the current position, then once
        for every further block of output.
        """
        block_size = self._dtype.block_size
        self._progress = callback
        self._total_blocks = (
            (self._stream_length + block_size - 1) // block_size)
        self._check_progress()

    def read(self, size=-1):
        """Return up to ``size`` decompressed bytes (all remaining if negative).

        A short or empty result means the end of the stream, or that the
        compressed input ran out.
        """
        remaining = self._stream_length - self._stream_pos
        if size < 0 or size > remaining:
            size = remaining

        out = bytearray()

        while len(out) < size:
            need = size - len(out)
            chunk = self._outbuf[self._outbuf_pos:self._outbuf_pos + need]
            out += chunk
            self._outbuf_pos += len(chunk)

            # Once the decoder has produced nothing, never ask it again.
            if self._failed:
                break

            if self._outbuf_pos >= len(self._outbuf):
                self._outbuf = self._impl.read()
                self._outbuf_pos = 0

            if not self._outbuf:
                self._failed = True
                break

        result = bytes(out)
        self._crc.update(result)
        self._stream_pos += len(result)

        if self._progress is not None:
            self._check_progress()

        return result

    def crc(self):
        """CRC-16 of all data returned so far."""
        return self._crc.value

    def length(self):
        """Number of bytes returned so far."""
        return self._stream_pos