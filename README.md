# recel

recel upscales pixel art. It first builds a distance map of the image:
the border of the image is the first level, each level grows by flood
filling pixels of the same colour, and the next level starts from the
untouched pixels next to it. Within a level, a pixel's distance is offset
by the frequency rank of its colour, so rarer colours rank higher. The
map then decides, row by row, how to fill the two new rows inserted
between each pair of original rows: each run of differing distances is
taken from one row or the other depending on how it meets the pixels on
either side. Rows are inflated, the image is transposed, and the same
step runs again for the columns.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
recel input.png
```

The command loads `input.png` (any format Pillow can read), prints
`loaded 'input.png', W*H*N` and writes, in the current directory:

- `dist.png`: the distance map of the input, scaled to grey levels;
- `outh.png`: the image after the first (row) pass;
- `imag-0.png`, `dist-0.png`, `imag-1.png`, `dist-1.png`: the image and
  distance map after each pass (the second pass is stored transposed);
- `outi.png` and `outd.png`: the final image and its distance map.

An image of `w × h` pixels comes out at `(3w − 2) × (3h − 2)`.

The flags `-h` and `-v` are accepted but do not change the output. With
no arguments the command prints a usage line and exits with status 2; if
the image cannot be loaded or processed it exits with status 1.

## Library

Images are flat lists of 32-bit RGBA pixel values (`r | g << 8 | b << 16
| a << 24`), row by row.

```python
from recel.cli import load_image, save_image
from recel.distance import distance_map, save_dist
from recel.inflate import inflate, interleave, transpose

loaded = load_image("input.png")
width, height = loaded.width, loaded.height
dist = distance_map(width, height, loaded.pixels)
save_dist("dist.png", width, height, dist)

inner = inflate(dist, loaded.pixels, width, height)
taller = interleave(loaded.pixels, inner, width, height)
save_image("taller.png", width, 3 * height - 2, taller)
```

Modules:

- `recel.cli`: `load_image` (returns a `LoadedImage` with `width`,
  `height`, `components` and `pixels`), `save_image` and `main`.
- `recel.distance`: `distance_map`, `dist_to_u8` (scales to 0–255, the
  largest value becoming 255) and `save_dist` (greyscale PNG).
- `recel.inflate`: `inflate`, `inflate_segment`, `segment_bound`,
  `interleave`, `transpose` and `fliph` (mirrors every row but the last).
- `recel.colorcounter.ColorCounter`: counts colour occurrences
  (`start`, `incr`, `count`, `distinct_count`, `len()`) and ranks them
  from most to least frequent (`rank`, `get_rank`; unknown values give
  `-1`).
- `recel.scan`: `scanline` and `scan`, an alternative row blender that
  returns a `(dist, line)` pair of new rows.
- `recel.pngwrite`: PNG output (`png_to_bytes`, `write_png`) with its own
  fixed-Huffman deflate encoder (`zlib_compress`) and `crc32`.
- `recel.rasterwrite`: BMP, TGA (plain or run-length encoded) and
  Radiance HDR output: `bmp_to_bytes`, `write_bmp`, `tga_to_bytes`,
  `write_tga`, `hdr_to_bytes`, `write_hdr`, and `linear_to_rgbe`.

Invalid sizes, component counts or buffers raise `ValueError`.

## What it does not do

- The writers only write; reading images is left to Pillow.
- The command always writes PNG files with fixed names into the current
  directory; there are no options for output names, formats or scale.
- Images with a side longer than 32768 pixels, or too small for their
  border pixels to be distinct, are rejected by `distance_map`.