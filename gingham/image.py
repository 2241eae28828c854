"""
Loading and saving surfaces as PNG files, using pypng.
"""

import os
from shutil import copyfile
from tempfile import NamedTemporaryFile
from typing import BinaryIO

import numpy as np
import png

from .surface import Surface


def save_png(surface: Surface, path: str):
    # Write to a temp file first, so a failure doesn't leave a broken image behind
    with NamedTemporaryFile(prefix="gingham", delete=False) as f:
        _save_png(surface, f)
    copyfile(f.name, path)
    os.remove(f.name)


def _save_png(surface: Surface, dest: BinaryIO):
    w, h = surface.size
    writer = png.Writer(width=w, height=h, bitdepth=8, greyscale=False, alpha=True)
    rows = (surface.data[:, i].tobytes() for i in range(h))
    writer.write(dest, rows)


def load_png(path: str) -> Surface:
    "Load any kind of PNG into an RGBA surface."
    reader = png.Reader(filename=path)
    w, h, rows, info = reader.asRGBA8()
    pixels = np.vstack([np.frombuffer(bytes(row), dtype=np.uint8) for row in rows])
    # pypng gives rows of r,g,b,a values; surfaces are [x, y, rgba]
    data = pixels.reshape(h, w, 4).transpose(1, 0, 2).copy()
    return Surface(data=data)
