"""Doubling the rows of an image by inserting rows shaped by its distance map.

Between every pair of neighbouring rows, two new rows are produced.  Where
the distances of the two rows agree, each new row copies its neighbour.
Where they differ, the pixels are split into segments.  Each segment is
filled from one row or the other according to how it meets the pixels on
either side.
"""

from __future__ import annotations

from collections.abc import Sequence


def _check_size(name: str, values: Sequence[int], expected: int) -> None:
    if len(values) != expected:
        raise ValueError(f"{name} has {len(values)} values, expected {expected}")


def segment_bound(d1, d2, x, width) -> int:
    """End (exclusive) of the segment starting at ``x``.

    The segment grows while the two distance rows keep crossing the same way,
    i.e. ``d1[x] < d2[x - 1]`` and ``d1[x - 1] < d2[x]``.  It always holds at
    least one column.
    """
    x += 1
    while x < width and d1[x] < d2[x - 1] and d1[x - 1] < d2[x]:
        x += 1
    return x


def inflate_segment(d1, d2, i1, i2, o1, o2, x0, x1, width) -> None:
    """Fill columns ``x0`` to ``x1 - 1`` of the output rows ``o1`` and ``o2``.

    ``d1``/``i1`` is the row with the lower distance and ``d2``/``i2`` the
    other one.  Each column either keeps both rows apart (``o1`` from ``i1``
    and ``o2`` from ``i2``) or lets the higher row cover both outputs.  Which
    one is chosen depends on whether the segment sticks to the higher row at
    its left end, its right end, both or neither.
    """
    stick_left = x0 > 0 and d1[x0 - 1] >= d2[x0]
    stick_right = x1 < width - 1 and d1[x1] >= d2[x1 - 1]
    length = x1 - x0

    if stick_left and stick_right:
        d = (length + 1) // 4
        spans = ((x0 + d, True), (x1 - d, False), (x1, True))
    elif stick_left:
        d = length // 2
        spans = ((x0 + d, True), (x1, False))
    elif stick_right:
        d = (length + 1) // 2
        spans = ((x0 + d, False), (x1, True))
    else:
        d = (length + 3) // 4
        spans = ((x0 + d, False), (x1 - d, True), (x1, False))

    x = x0
    for stop, covered in spans:
        while x < stop:
            o1[x] = i2[x] if covered else i1[x]
            o2[x] = i2[x]
            x += 1


def inflate(dist, image, width, height) -> list[int]:
    """Produce the ``2 * (height - 1)`` rows to insert between rows of ``image``.

    ``dist`` and ``image`` hold ``width * height`` values, row by row.  Rows
    ``2y`` and ``2y + 1`` of the result lie between input rows ``y`` and
    ``y + 1``.
    """
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    dist = list(dist)
    image = list(image)
    _check_size("dist", dist, width * height)
    _check_size("image", image, width * height)
    if width == 0:
        return []

    out: list[int] = []
    for y in range(height - 1):
        top = slice(y * width, (y + 1) * width)
        bottom = slice((y + 1) * width, (y + 2) * width)
        d_top, d_bottom = dist[top], dist[bottom]
        i_top, i_bottom = image[top], image[bottom]
        o_top = [0] * width
        o_bottom = [0] * width

        x = 0
        while x < width:
            if d_top[x] == d_bottom[x]:
                o_top[x] = i_top[x]
                o_bottom[x] = i_bottom[x]
                x += 1
                continue
            if d_top[x] < d_bottom[x]:
                rows = (d_top, d_bottom, i_top, i_bottom, o_top, o_bottom)
            else:
                rows = (d_bottom, d_top, i_bottom, i_top, o_bottom, o_top)
            end = segment_bound(rows[0], rows[1], x, width)
            inflate_segment(*rows, x, end, width)
            x = end

        out += o_top
        out += o_bottom
    return out


def fliph(image, width, height) -> list[int]:
    """Mirror the rows of ``image`` left to right; the last row is left as is."""
    image = list(image)
    _check_size("image", image, width * height)
    for y in range(height - 1):
        row = slice(y * width, (y + 1) * width)
        image[row] = image[row][::-1]
    return image


def interleave(outer, inner, width, height) -> list[int]:
    """Place each pair of ``inner`` rows between consecutive ``outer`` rows.

    ``outer`` has ``height`` rows and ``inner`` has ``2 * (height - 1)``; the
    result has ``3 * height - 2`` rows.
    """
    outer = list(outer)
    inner = list(inner)
    if height < 1:
        raise ValueError("height must be at least 1")
    _check_size("outer", outer, width * height)
    _check_size("inner", inner, width * 2 * (height - 1))

    out = outer[:width]
    for y in range(height - 1):
        out += inner[2 * y * width:(2 * y + 2) * width]
        out += outer[(y + 1) * width:(y + 2) * width]
    return out


def transpose(image, width, height) -> list[int]:
    """Swap rows and columns; the result is ``height`` wide and ``width`` tall."""
    image = list(image)
    _check_size("image", image, width * height)
    return [image[y * width + x] for x in range(width) for y in range(height)]