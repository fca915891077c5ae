"""A small PNG encoder with its own fixed-Huffman deflate compressor."""

from __future__ import annotations

import os
import struct
import zlib

_ZHASH = 16384
_MASK32 = 0xFFFFFFFF

_LENGTH_BASE = (3, 4, 5, 6, 7, 8, 9, 10, 11, 13, 15, 17, 19, 23, 27, 31, 35, 43, 51,
                59, 67, 83, 99, 115, 131, 163, 195, 227, 258, 259)
_LENGTH_EXTRA = (0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 2, 2, 2, 2, 3, 3, 3, 3, 4, 4, 4,
                 4, 5, 5, 5, 5, 0)
_DIST_BASE = (1, 2, 3, 4, 5, 7, 9, 13, 17, 25, 33, 49, 65, 97, 129, 193, 257, 385,
              513, 769, 1025, 1537, 2049, 3073, 4097, 6145, 8193, 12289, 16385,
              24577, 32768)
_DIST_EXTRA = (0, 0, 0, 0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10,
               10, 11, 11, 12, 12, 13, 13)

_PNG_SIGNATURE = bytes((137, 80, 78, 71, 13, 10, 26, 10))
_COLOR_TYPES = {1: 0, 2: 4, 3: 2, 4: 6}

# Filter candidates for the first row, where "up" does not exist.
_FIRST_ROW_FILTERS = (0, 1, 0, 5, 6)
_ROW_FILTERS = (0, 1, 2, 3, 4)


def _bitrev(code: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result


class _BitWriter:
    def __init__(self, out: bytearray) -> None:
        self.out = out
        self.buffer = 0
        self.count = 0

    def add(self, code: int, bits: int) -> None:
        self.buffer |= code << self.count
        self.count += bits
        while self.count >= 8:
            self.out.append(self.buffer & 0xFF)
            self.buffer >>= 8
            self.count -= 8

    def huff(self, n: int) -> None:
        if n <= 143:
            self.add(_bitrev(0x30 + n, 8), 8)
        elif n <= 255:
            self.add(_bitrev(0x190 + n - 144, 9), 9)
        elif n <= 279:
            self.add(_bitrev(n - 256, 7), 7)
        else:
            self.add(_bitrev(0xC0 + n - 280, 8), 8)

    def pad(self) -> None:
        while self.count:
            self.add(0, 1)


def _zhash(data: bytes, i: int) -> int:
    h = data[i] + (data[i + 1] << 8) + (data[i + 2] << 16)
    h ^= (h << 3) & _MASK32
    h = (h + (h >> 5)) & _MASK32
    h ^= (h << 4) & _MASK32
    h = (h + (h >> 17)) & _MASK32
    h ^= (h << 25) & _MASK32
    h = (h + (h >> 6)) & _MASK32
    return h


def _match_length(data: bytes, a: int, b: int, limit: int) -> int:
    limit = min(limit, 258)
    length = 0
    while length < limit and data[a + length] == data[b + length]:
        length += 1
    return length


def zlib_compress(data, quality=8) -> bytes:
    """Compress ``data`` into a zlib stream using fixed Huffman codes.

    ``quality`` bounds the hash chain length (at least 5); higher values give
    smaller output at the cost of time.
    """
    data = bytes(data)
    size = len(data)
    quality = max(quality, 5)

    out = bytearray(b"\x78\x5e")
    bits = _BitWriter(out)
    bits.add(1, 1)  # final block
    bits.add(1, 2)  # fixed Huffman

    table: dict[int, list[int]] = {}
    i = 0
    while i < size - 3:
        bucket = table.setdefault(_zhash(data, i) & (_ZHASH - 1), [])
        best = 3
        best_pos = None
        for pos in bucket:
            if pos > i - 32768:
                length = _match_length(data, pos, i, size - i)
                if length >= best:
                    best, best_pos = length, pos
        if len(bucket) == 2 * quality:
            del bucket[:quality]
        bucket.append(i)

        if best_pos is not None:
            # Lazy matching: prefer a literal if the next byte starts a longer match.
            for pos in table.get(_zhash(data, i + 1) & (_ZHASH - 1), ()):
                if pos > i - 32767 and _match_length(data, pos, i + 1, size - i - 1) > best:
                    best_pos = None
                    break

        if best_pos is not None:
            distance = i - best_pos
            j = 0
            while best > _LENGTH_BASE[j + 1] - 1:
                j += 1
            bits.huff(j + 257)
            if _LENGTH_EXTRA[j]:
                bits.add(best - _LENGTH_BASE[j], _LENGTH_EXTRA[j])
            j = 0
            while distance > _DIST_BASE[j + 1] - 1:
                j += 1
            bits.add(_bitrev(j, 5), 5)
            if _DIST_EXTRA[j]:
                bits.add(distance - _DIST_BASE[j], _DIST_EXTRA[j])
            i += best
        else:
            bits.huff(data[i])
            i += 1

    for byte in data[i:]:
        bits.huff(byte)
    bits.huff(256)
    bits.pad()

    out += struct.pack(">I", zlib.adler32(data) & _MASK32)
    return bytes(out)


def crc32(data) -> int:
    """CRC-32 of ``data`` as used by PNG chunks."""
    return zlib.crc32(bytes(data)) & _MASK32


def _paeth(a: int, b: int, c: int) -> int:
    p = a + b - c
    pa, pb, pc = abs(p - a), abs(p - b), abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _filter_row(kind: int, row: bytes, prior: bytes, n: int) -> bytearray:
    result = bytearray(len(row))
    for i, value in enumerate(row):
        left = row[i - n] if i >= n else 0
        up = prior[i]
        upleft = prior[i - n] if i >= n else 0
        if kind == 1:
            value -= left
        elif kind == 2:
            value -= up
        elif kind == 3:
            value -= (left + up) >> 1
        elif kind == 4:
            value -= _paeth(left, up, upleft)
        elif kind == 5:
            value -= left >> 1
        elif kind == 6:
            value -= _paeth(left, 0, 0)
        result[i] = value & 0xFF
    return result


def _estimate(filtered: bytearray) -> int:
    return sum(v if v < 128 else 256 - v for v in filtered)


def png_to_bytes(pixels, width, height, components, stride=0) -> bytes:
    """Encode 8-bit interleaved ``pixels`` as a PNG file in memory.

    ``components`` is 1 (Y), 2 (YA), 3 (RGB) or 4 (RGBA).  ``stride`` is the
    distance in bytes between rows; 0 means rows are packed.
    """
    if components not in _COLOR_TYPES:
        raise ValueError(f"unsupported component count: {components}")
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    row_bytes = width * components
    if stride == 0:
        stride = row_bytes
    pixels = bytes(pixels)
    if height and len(pixels) < stride * (height - 1) + row_bytes:
        raise ValueError("pixel buffer is too small for the image")

    filtered = bytearray()
    prior = bytes(row_bytes)
    for y in range(height):
        row = pixels[stride * y: stride * y + row_bytes]
        candidates = _ROW_FILTERS if y else _FIRST_ROW_FILTERS
        best_index, best_line, best_estimate = 0, None, None
        for index, kind in enumerate(candidates):
            line = _filter_row(kind, row, prior, components)
            estimate = _estimate(line)
            if best_estimate is None or estimate < best_estimate:
                best_index, best_line, best_estimate = index, line, estimate
        filtered.append(best_index)
        filtered += best_line
        prior = row

    compressed = zlib_compress(filtered, 8)

    def chunk(tag: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + tag + body + struct.pack(">I", crc32(tag + body))

    header = struct.pack(">IIBBBBB", width, height, 8, _COLOR_TYPES[components], 0, 0, 0)
    return b"".join((
        _PNG_SIGNATURE,
        chunk(b"IHDR", header),
        chunk(b"IDAT", compressed),
        chunk(b"IEND", b""),
    ))


def write_png(path, width, height, components, pixels, stride=0) -> None:
    """Encode ``pixels`` as PNG and write it to ``path``."""
    data = png_to_bytes(pixels, width, height, components, stride)
    with open(os.fspath(path), "wb") as handle:
        handle.write(data)