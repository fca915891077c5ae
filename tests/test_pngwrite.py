import io
import random
import struct
import zlib

import pytest
from PIL import Image

from recel.pngwrite import crc32, png_to_bytes, write_png, zlib_compress

MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


def random_bytes(count, seed=0):
    rng = random.Random(seed)
    return bytes(rng.randrange(256) for _ in range(count))


def decode(png):
    with Image.open(io.BytesIO(png)) as image:
        image.load()
        return image.mode, image.size, image.tobytes()


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"a",
        b"abc",
        b"abcd",
        b"abcabcabcabcabcabcabc",
        b"\x00" * 1000,
        bytes(range(256)) * 4,
        random_bytes(3000),
        b"hello world " * 300,
    ],
)
def test_zlib_round_trip(data):
    assert zlib.decompress(zlib_compress(data, 8)) == data


def test_zlib_header():
    assert zlib_compress(b"data", 8)[:2] == b"\x78\x5e"


def test_zlib_quality_floor():
    data = b"abracadabra" * 50
    assert zlib_compress(data, 1) == zlib_compress(data, 5)


def test_zlib_repetitive_data_shrinks():
    data = b"\x11\x22\x33" * 2000
    compressed = zlib_compress(data, 8)
    assert len(compressed) < len(data) // 10
    assert zlib.decompress(compressed) == data


def test_zlib_trailer_is_adler32():
    data = random_bytes(500, seed=3)
    assert zlib_compress(data, 8)[-4:] == struct.pack(">I", zlib.adler32(data))


def test_crc32_of_iend_tag():
    assert crc32(b"IEND") == 0xAE426082


def test_crc32_matches_zlib():
    data = random_bytes(200, seed=7)
    assert crc32(data) == zlib.crc32(data)


@pytest.mark.parametrize("components", [1, 2, 3, 4])
def test_png_round_trip(components):
    width, height = 7, 5
    pixels = random_bytes(width * height * components, seed=components)
    mode, size, data = decode(png_to_bytes(pixels, width, height, components, 0))
    assert mode == MODES[components]
    assert size == (width, height)
    assert data == pixels


def test_png_structure():
    png = png_to_bytes(bytes(4 * 3 * 2), 3, 2, 4, 0)
    assert png[:8] == bytes((137, 80, 78, 71, 13, 10, 26, 10))
    assert png[12:16] == b"IHDR"
    width, height, depth, color = struct.unpack(">IIBB", png[16:26])
    assert (width, height, depth, color) == (3, 2, 8, 6)
    assert png[-12:] == b"\x00\x00\x00\x00IEND" + struct.pack(">I", crc32(b"IEND"))


def test_png_filter_bytes_are_valid():
    width, height = 6, 6
    pixels = bytes((x * 40 + y * 7) & 0xFF for y in range(height) for x in range(width * 3))
    png = png_to_bytes(pixels, width, height, 3, 0)
    length = struct.unpack(">I", png[33:37])[0]
    assert png[37:41] == b"IDAT"
    raw = zlib.decompress(png[41:41 + length])
    row = width * 3 + 1
    assert len(raw) == row * height
    assert all(raw[y * row] in range(5) for y in range(height))
    assert decode(png)[2] == pixels


def test_png_stride():
    width, height, components = 4, 3, 3
    packed = random_bytes(width * height * components, seed=11)
    stride = width * components + 5
    padded = b"".join(
        packed[y * width * components:(y + 1) * width * components] + b"\xee" * 5
        for y in range(height)
    )
    assert decode(png_to_bytes(padded, width, height, components, stride))[2] == packed


def test_png_rejects_bad_components():
    with pytest.raises(ValueError):
        png_to_bytes(b"\x00" * 10, 1, 1, 5, 0)


def test_png_rejects_short_buffer():
    with pytest.raises(ValueError):
        png_to_bytes(b"\x00" * 5, 2, 2, 3, 0)


def test_write_png(tmp_path):
    width, height = 3, 4
    pixels = random_bytes(width * height, seed=5)
    target = tmp_path / "out.png"
    write_png(target, width, height, 1, pixels, 0)
    mode, size, data = decode(target.read_bytes())
    assert (mode, size, data) == ("L", (width, height), pixels)