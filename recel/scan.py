"""Blending two neighbouring rows of an image guided by their distance maps."""

from __future__ import annotations

_CURVE_MIN_LENGTH = 6


def _check_row(width: int, row, name: str) -> list[int]:
    row = list(row)
    if len(row) != width:
        raise ValueError(f"{name} has {len(row)} values, expected {width}")
    return row


def scanline(width, dista, distb, linea, lineb) -> tuple[list[int], list[int]]:
    """Merge rows ``a`` and ``b`` into one row, returning ``(dist, line)``.

    Where the two distances agree, row ``a`` is taken.  Elsewhere each run is
    filled from one row or the other depending on how the run connects to its
    neighbours.  The last column is not part of any run and is taken from row
    ``a``.
    """
    if width <= 0:
        raise ValueError("width must be positive")
    dista = _check_row(width, dista, "dista")
    distb = _check_row(width, distb, "distb")
    linea = _check_row(width, linea, "linea")
    lineb = _check_row(width, lineb, "lineb")

    disto = list(dista)
    lineo = list(linea)
    last = width - 1
    i = 0
    while i < last:
        if dista[i] == distb[i]:
            i += 1
            continue

        if dista[i] < distb[i]:
            low, high = (dista, linea), (distb, lineb)
        else:
            low, high = (distb, lineb), (dista, linea)
        dist1, dist2 = low[0], high[0]

        k = dist1[i]
        j = i + 1
        while j < last and dist1[j] == k and dist2[j] > k:
            j += 1

        stick_left = i > 0 and dist1[i - 1] >= dist2[i]
        stick_right = dist1[j] >= dist2[j - 1]

        if stick_left == stick_right:
            outer, inner = (high, low) if stick_left else (low, high)
            if j - i > _CURVE_MIN_LENGTH:
                d = (j - i) // 3
                spans = ((i, i + d, outer), (i + d, j - d, inner), (j - d, j, outer))
            else:
                spans = ((i, j, outer),)
        else:
            left, right = (high, low) if stick_left else (low, high)
            middle = (i + j) // 2
            spans = ((i, middle, left), (middle, j, right))

        for start, stop, (dist, line) in spans:
            disto[start:stop] = dist[start:stop]
            lineo[start:stop] = line[start:stop]
        i = j

    return disto, lineo


def scan(width, height, dist, line) -> tuple[list[int], list[int]]:
    """Merge every pair of consecutive rows, returning ``(dist, line)``.

    Row ``y`` of the result merges input rows ``y`` and ``y + 1``; the last
    row has no successor and is copied from the input.
    """
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    dist = list(dist)
    line = list(line)
    size = width * height
    if len(dist) != size or len(line) != size:
        raise ValueError(f"expected {size} values for a {width}x{height} image")

    disto = list(dist)
    lineo = list(line)
    for y in range(height - 1):
        top = slice(y * width, (y + 1) * width)
        bottom = slice((y + 1) * width, (y + 2) * width)
        row_dist, row_line = scanline(width, dist[top], dist[bottom], line[top], line[bottom])
        disto[top] = row_dist
        lineo[top] = row_line
    return disto, lineo