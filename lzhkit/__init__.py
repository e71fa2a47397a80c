"""Building blocks for reading LHA (.lzh) archives: integer decoding, CRC-16,
bit streams, extended headers, the -lh1- decompressor and extraction helpers."""

__version__ = "0.4.0"

__all__ = ["arch", "bitstream", "crc16", "decoder", "endian", "ext_header", "lh1"]