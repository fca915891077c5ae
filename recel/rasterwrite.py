"""Writers for uncompressed and RLE raster formats: BMP, TGA and Radiance HDR."""

from __future__ import annotations

import math
import os
import struct

_MASK32 = 0xFFFFFFFF
_PINK = (255, 0, 255)
_HDR_HEADER = b"#?RADIANCE\n# Written by recel\nFORMAT=32-bit_rle_rgbe\n"


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _check_image(width: int, height: int, components: int, pixels) -> bytes:
    if components not in (1, 2, 3, 4):
        raise ValueError(f"unsupported component count: {components}")
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    pixels = bytes(pixels)
    if len(pixels) < width * height * components:
        raise ValueError("pixel buffer is too small for the image")
    return pixels


def _encode_pixel(d: bytes, components: int, write_alpha: int, expand_mono: bool) -> bytes:
    """Encode one pixel in BGR order, with alpha before (<0), after (>0) or dropped (0)."""
    out = bytearray()
    if write_alpha < 0:
        out.append(d[components - 1])
    if components == 1:
        out.append(d[0])
    elif components == 2:
        out += bytes((d[0], d[0], d[0])) if expand_mono else d[:1]
    elif components == 4 and not write_alpha:
        alpha = d[3]
        px = [bg + _trunc_div((v - bg) * alpha, 255) for v, bg in zip(d[:3], _PINK)]
        out += bytes((px[2] & 0xFF, px[1] & 0xFF, px[0] & 0xFF))
    else:
        out += bytes((d[2], d[1], d[0]))
    if write_alpha > 0:
        out.append(d[components - 1])
    return bytes(out)


def _rows_bottom_up(pixels: bytes, width: int, height: int, components: int):
    row_bytes = width * components
    for y in range(height - 1, -1, -1):
        row = pixels[y * row_bytes:(y + 1) * row_bytes]
        yield [row[i * components:(i + 1) * components] for i in range(width)]


def _encode_pixels(pixels: bytes, width: int, height: int, components: int,
                   write_alpha: int, pad: int, expand_mono: bool) -> bytes:
    out = bytearray()
    for row in _rows_bottom_up(pixels, width, height, components):
        for pixel in row:
            out += _encode_pixel(pixel, components, write_alpha, expand_mono)
        out += bytes(pad)
    return bytes(out)


def _write_file(path, data: bytes) -> None:
    with open(os.fspath(path), "wb") as handle:
        handle.write(data)


def bmp_to_bytes(width, height, components, pixels) -> bytes:
    """Encode 8-bit interleaved ``pixels`` as a 24-bit bottom-up BMP.

    Alpha is not stored: RGBA pixels are composited against magenta.
    """
    pixels = _check_image(width, height, components, pixels)
    pad = (-width * 3) & 3
    header = struct.pack(
        "<2sIHHIIIIHHIIIIII",
        b"BM", (14 + 40 + (width * 3 + pad) * height) & _MASK32, 0, 0, 14 + 40,
        40, width & _MASK32, height & _MASK32, 1, 24, 0, 0, 0, 0, 0, 0,
    )
    return header + _encode_pixels(pixels, width, height, components, 0, pad, True)


def write_bmp(path, width, height, components, pixels) -> None:
    """Encode ``pixels`` as BMP and write it to ``path``."""
    _write_file(path, bmp_to_bytes(width, height, components, pixels))


def _tga_rle_row(row: list[bytes], components: int, has_alpha: int) -> bytes:
    out = bytearray()
    x = len(row)
    i = 0
    while i < x:
        length = 1
        diff = True
        if i < x - 1:
            length += 1
            diff = row[i] != row[i + 1]
            if diff:
                prev = i
                for k in range(i + 2, x):
                    if length >= 128:
                        break
                    if row[prev] != row[k]:
                        prev += 1
                        length += 1
                    else:
                        length -= 1
                        break
            else:
                for k in range(i + 2, x):
                    if length >= 128 or row[i] != row[k]:
                        break
                    length += 1

        if diff:
            out.append((length - 1) & 0xFF)
            for pixel in row[i:i + length]:
                out += _encode_pixel(pixel, components, has_alpha, False)
        else:
            out.append((length - 129) & 0xFF)
            out += _encode_pixel(row[i], components, has_alpha, False)
        i += length
    return bytes(out)


def tga_to_bytes(width, height, components, pixels, rle=True) -> bytes:
    """Encode 8-bit interleaved ``pixels`` as a bottom-up TGA, RLE-compressed if ``rle``."""
    pixels = _check_image(width, height, components, pixels)
    has_alpha = 1 if components in (2, 4) else 0
    colorbytes = components - 1 if has_alpha else components
    image_type = 3 if colorbytes < 2 else 2
    if rle:
        image_type += 8
    header = struct.pack(
        "<BBBHHBHHHHBB",
        0, 0, image_type, 0, 0, 0, 0, 0, width & 0xFFFF, height & 0xFFFF,
        ((colorbytes + has_alpha) * 8) & 0xFF, has_alpha * 8,
    )
    if not rle:
        return header + _encode_pixels(pixels, width, height, components, has_alpha, 0, False)
    body = b"".join(
        _tga_rle_row(row, components, has_alpha)
        for row in _rows_bottom_up(pixels, width, height, components)
    )
    return header + body


def write_tga(path, width, height, components, pixels, rle=True) -> None:
    """Encode ``pixels`` as TGA and write it to ``path``."""
    _write_file(path, tga_to_bytes(width, height, components, pixels, rle))


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def linear_to_rgbe(linear) -> bytes:
    """Convert a linear RGB triple to the 4-byte shared-exponent RGBE form."""
    r, g, b = (_f32(float(v)) for v in linear[:3])
    maxcomp = r if r > (g if g > b else b) else (g if g > b else b)
    if maxcomp < 1e-32:
        return bytes(4)
    mantissa, exponent = math.frexp(maxcomp)
    normalize = _f32(_f32(_f32(mantissa) * 256.0) / maxcomp)
    channels = (int(_f32(v * normalize)) & 0xFF for v in (r, g, b))
    return bytes((*channels, (exponent + 128) & 0xFF))


def _rgbe_pixels(scanline, width: int, components: int):
    for x in range(width):
        base = x * components
        if components in (3, 4):
            linear = scanline[base:base + 3]
        else:
            linear = (scanline[base],) * 3
        yield linear_to_rgbe(linear)


def _rle_component(values: bytes) -> bytes:
    out = bytearray()
    width = len(values)
    x = 0
    while x < width:
        r = x
        while r + 2 < width:
            if values[r] == values[r + 1] == values[r + 2]:
                break
            r += 1
        if r + 2 >= width:
            r = width
        while x < r:
            length = min(r - x, 128)
            out.append(length & 0xFF)
            out += values[x:x + length]
            x += length
        if r + 2 < width:
            while r < width and values[r] == values[x]:
                r += 1
            while x < r:
                length = min(r - x, 127)
                out += bytes((length + 128, values[x]))
                x += length
    return bytes(out)


def _hdr_scanline(scanline, width: int, components: int) -> bytes:
    encoded = list(_rgbe_pixels(scanline, width, components))
    if width < 8 or width >= 32768:
        return b"".join(encoded)
    out = bytearray((2, 2, (width & 0xFF00) >> 8, width & 0xFF))
    for channel in range(4):
        out += _rle_component(bytes(pixel[channel] for pixel in encoded))
    return bytes(out)


def hdr_to_bytes(width, height, components, data) -> bytes:
    """Encode linear float ``data`` as a Radiance RGBE (.hdr) image.

    Alpha is dropped; single-channel data is replicated to all three channels.
    """
    if data is None:
        raise ValueError("no image data")
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if components not in (1, 2, 3, 4):
        raise ValueError(f"unsupported component count: {components}")
    data = list(data)
    row_len = width * components
    if len(data) < row_len * height:
        raise ValueError("data buffer is too small for the image")
    parts = [
        _HDR_HEADER,
        f"EXPOSURE=          1.0000000000000\n\n-Y {height} +X {width}\n".encode("ascii"),
    ]
    parts.extend(
        _hdr_scanline(data[y * row_len:(y + 1) * row_len], width, components)
        for y in range(height)
    )
    return b"".join(parts)


def write_hdr(path, width, height, components, data) -> None:
    """Encode ``data`` as Radiance HDR and write it to ``path``."""
    _write_file(path, hdr_to_bytes(width, height, components, data))