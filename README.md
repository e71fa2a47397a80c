# lzhkit

Pure-Python building blocks for reading LHA (`.lzh`) archives. It needs
nothing outside the standard library.

## Contents

- `lzhkit.endian`: decoding of fixed-width unsigned integers from a buffer
  at an optional offset: `decode_uint16`, `decode_uint32`, `decode_uint64`
  (little-endian) and `decode_be_uint16`, `decode_be_uint32` (big-endian).
- `lzhkit.crc16`: the CRC-16 used in LHA archives. `crc16(data, crc=0)`
  returns the CRC of `data`, continuing from `crc`; `Crc16` keeps a running
  value in its `value` attribute, updated by `Crc16.update(data)`.
- `lzhkit.bitstream`: `BitStreamReader`, which reads bit fields, most
  significant bit first, from a `read(max_bytes) -> bytes` function.
  `peek_bits(n)` looks ahead, `read_bits(n)` and `read_bit()` consume.
  Running out of input raises `EOFError`.
- `lzhkit.ext_header`: `decode_ext_header(fields, num, data)` decodes one
  extended header block into an `ExtendedFields` dataclass (filename, path,
  Unix timestamp, permissions, UID/GID, user and group names, OS-9
  permissions, Windows timestamps, common-header CRC). `fields.extra_flags`
  (an `ExtraFlags` value) records which optional fields were set. Header
  numbers are listed in `ExtHeaderType`. Unsupported types and blocks that
  are too short raise `ExtHeaderError`. For the common header, `data` must
  be writable: its CRC field is zeroed in place so that the header CRC can
  be computed afterwards. Path separators in filenames are replaced by `_`.
- `lzhkit.lh1`: `LH1Decoder`, the adaptive-Huffman `-lh1-` decompressor.
  Each call to `read()` decodes one command and returns the bytes it
  produces, or `b""` once the compressed input is exhausted.
- `lzhkit.decoder`: `Decoder` wraps a decompressor, cuts output at exactly
  the expected length, keeps a CRC-16 of what it has returned (`crc()`) and
  counts it (`length()`). Methods are looked up by name with
  `decoder_for_name`, which returns a `DecoderType` or raises
  `UnknownMethodError`.
- `lzhkit.arch`: file system helpers for extracting files: `open_new_file`
  (creates a file exclusively after removing any existing one, then sets
  ownership and permissions), `mkdir`, `chown`, `chmod`, `utime`,
  `set_windows_timestamps`, `symlink`, and `exists`, which returns a
  `FileType`. On Windows, ownership, permissions and symbolic links are
  skipped.

## Installation

```
pip install .
```

## Example

```python
import io

from lzhkit.crc16 import crc16
from lzhkit.decoder import Decoder, decoder_for_name

with open("data.lh1", "rb") as f:
    compressed = io.BytesIO(f.read())

decoder = Decoder(decoder_for_name("-lh1-"), compressed.read, 18092)

out = bytearray()
while chunk := decoder.read(4096):
    out += chunk

assert decoder.crc() == crc16(out)
print(decoder.length(), "bytes decoded")
```

`Decoder.read(size)` returns all remaining bytes when `size` is negative
or omitted. A result shorter than asked for means the end of the stream or
that the compressed input ran out.

To follow progress, give `Decoder.monitor` a callback. It is called at once
for the current position and then once for every further block of output,
with the block number and the total number of blocks:

```python
decoder.monitor(lambda block, total: print(f"{block}/{total}"))
```

## What it does not do

- It does not read archives as a whole: there is no parsing of the main
  file headers, no listing of archive contents and no extraction of
  files. The pieces here (header integer decoding, extended headers, CRC,
  decompression, file helpers) have to be put together by the caller.
- The only compression method it can decompress is `-lh1-`.
  `decoder_for_name` raises `UnknownMethodError` for every other name,
  including the stored methods and `-lh5-`, `-lh6-` and `-lh7-`.
- There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```