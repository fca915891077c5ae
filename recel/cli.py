"""Command line front end: load an image, build its distance map and upscale it."""

from __future__ import annotations

import struct
import sys
from typing import NamedTuple

from PIL import Image

from .distance import distance_map, save_dist
from .inflate import inflate, interleave, transpose
from .pngwrite import write_png

_FLAGS = ("-h", "-v")


class LoadedImage(NamedTuple):
    """An image as packed RGBA values, one 32-bit integer per pixel."""

    width: int
    height: int
    components: int
    pixels: list[int]


def _components(img: Image.Image) -> int:
    if img.mode == "P":
        return 4 if "transparency" in img.info else 3
    return len(img.getbands())


def load_image(path) -> LoadedImage:
    """Read an image file as packed RGBA pixels.

    Each pixel is ``r | g << 8 | b << 16 | a << 24``.  ``components`` is the
    channel count of the file itself.
    """
    with Image.open(path) as img:
        components = _components(img)
        rgba = img.convert("RGBA")
        width, height = rgba.size
        data = rgba.tobytes()
    pixels = list(struct.unpack(f"<{width * height}I", data))
    return LoadedImage(width, height, components, pixels)


def save_image(path, width, height, pixels) -> None:
    """Write packed RGBA pixels to ``path`` as a PNG."""
    pixels = list(pixels)
    if len(pixels) != width * height:
        raise ValueError(f"expected {width * height} pixels, got {len(pixels)}")
    write_png(path, width, height, 4, struct.pack(f"<{len(pixels)}I", *pixels))


def _upscale(width: int, height: int, image: list[int], dist: list[int]) -> None:
    for step in range(2):
        inner_dist = inflate(dist, dist, width, height)
        inner_image = inflate(dist, image, width, height)
        grown_dist = interleave(dist, inner_dist, width, height)
        grown_image = interleave(image, inner_image, width, height)
        height = 3 * height - 2
        if step == 0:
            save_image("outh.png", width, height, grown_image)

        save_image(f"imag-{step}.png", width, height, grown_image)
        save_dist(f"dist-{step}.png", width, height, grown_dist)

        image = transpose(grown_image, width, height)
        dist = transpose(grown_dist, width, height)
        width, height = height, width

    save_image("outi.png", width, height, image)
    save_dist("outd.png", width, height, dist)


def main(argv=None) -> int:
    """Upscale the image named by the first argument, writing PNGs to the current directory."""
    args = sys.argv[1:] if argv is None else list(argv)
    # The flags are recognised but do not change the output.
    flags = {arg for arg in args if arg in _FLAGS}
    del flags
    if not args:
        print("usage: recel IMAGE [-h] [-v]", file=sys.stderr)
        return 2

    path = args[0]
    try:
        loaded = load_image(path)
    except OSError as exc:
        print(f"cannot load '{path}': {exc}", file=sys.stderr)
        return 1
    print(f"loaded '{path}', {loaded.width}*{loaded.height}*{loaded.components}")

    try:
        dist = distance_map(loaded.width, loaded.height, loaded.pixels)
    except ValueError as exc:
        print(f"cannot process '{path}': {exc}", file=sys.stderr)
        return 1
    save_dist("dist.png", loaded.width, loaded.height, dist)
    _upscale(loaded.width, loaded.height, loaded.pixels, dist)
    return 0


if __name__ == "__main__":
    sys.exit(main())