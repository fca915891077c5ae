"""Pixel-art upscaling driven by distance maps, with PNG, BMP, TGA and HDR writers."""

__version__ = "0.1.0"