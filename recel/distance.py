"""Distance maps: how deep each pixel lies inside nested colour regions.

The border of the image is the first level.  Each level is grown by flood
filling 8-connected pixels of the same colour.  The next level then takes the
4-connected neighbours that are still untouched.  Within a level, a pixel's
distance is offset by the frequency rank of its colour.
"""

from __future__ import annotations

from collections.abc import Sequence

from .colorcounter import ColorCounter
from .pngwrite import write_png

_MAX_SIDE = 32768
_MASK32 = 0xFFFFFFFF
_QUEUED = -1

# Flood-fill neighbourhood, in the order the neighbours are visited.
_RING = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
# Neighbourhood used to seed the next level.
_CROSS = ((0, -1), (-1, 0), (1, 0), (0, 1))


class _DistanceBuilder:
    def __init__(self, width: int, height: int, pixels: Sequence[int]) -> None:
        self.width = width
        self.height = height
        self.pixels = pixels
        self.distance = [0] * (width * height)
        self.counter = ColorCounter()

    def _neighbours(self, index: int, offsets):
        y, x = divmod(index, self.width)
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield ny * self.width + nx

    def _push(self, worklist: list[int], index: int) -> None:
        if self.distance[index] != 0:
            raise ValueError("image is too small: a border pixel would be queued twice")
        self.distance[index] = _QUEUED
        self.counter.incr(self.pixels[index])
        worklist.append(index)

    def _init(self) -> list[int]:
        w, h = self.width, self.height
        worklist: list[int] = []
        self.counter.start()
        for x in range(w):
            self._push(worklist, x)
            self._push(worklist, (h - 1) * w + x)
        for y in range(1, h - 1):
            self._push(worklist, y * w)
            self._push(worklist, y * w + w - 1)
        return worklist

    def _propagate(self, worklist: list[int]) -> list[int]:
        done = 0
        while done < len(worklist):
            end = len(worklist)
            # The most recently queued pixels are visited first.
            for index in reversed(worklist[done:end]):
                colour = self.pixels[index]
                for n in self._neighbours(index, _RING):
                    if self.pixels[n] == colour and self.distance[n] == 0:
                        self._push(worklist, n)
            done = end
        return worklist

    def _next_level(self, level: int, worklist: list[int]) -> list[int]:
        upcoming: list[int] = []
        for index in reversed(worklist):
            for n in self._neighbours(index, _CROSS):
                if self.distance[n] == 0:
                    self._push(upcoming, n)
            rank = self.counter.get_rank(self.pixels[index])
            self.distance[index] = (level + rank) & _MASK32
        return upcoming

    def build(self) -> list[int]:
        worklist = self._init()
        level = 1
        while worklist:
            level += self.counter.distinct_count()
            self.counter.start()
            worklist = self._propagate(worklist)
            self.counter.rank()
            worklist = self._next_level(level, worklist)
        return self.distance


def _check_size(width: int, height: int, values: Sequence[int]) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if len(values) != width * height:
        raise ValueError(
            f"expected {width * height} values for a {width}x{height} image, got {len(values)}"
        )


def distance_map(width, height, pixels) -> list[int]:
    """Compute the distance map of a ``width`` x ``height`` image.

    ``pixels`` holds one packed colour value per pixel, row by row.  The
    result has one positive distance per pixel in the same layout.
    """
    pixels = list(pixels)
    _check_size(width, height, pixels)
    if width > _MAX_SIDE or height > _MAX_SIDE:
        raise ValueError(f"image sides must not exceed {_MAX_SIDE} pixels")
    return _DistanceBuilder(width, height, pixels).build()


def dist_to_u8(width, height, distance) -> bytes:
    """Scale a distance map to 8-bit grey levels, the largest value becoming 255."""
    distance = list(distance)
    _check_size(width, height, distance)
    peak = max(distance)
    if peak == 0:
        raise ValueError("distance map holds only zeros")
    return bytes((((value * 255) & _MASK32) // peak) & 0xFF for value in distance)


def save_dist(path, width, height, distance) -> None:
    """Write a distance map to ``path`` as a greyscale PNG."""
    write_png(path, width, height, 1, dist_to_u8(width, height, distance))