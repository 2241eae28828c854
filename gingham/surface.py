from typing import Tuple

import numpy as np

from .rect import Rectangle


class Surface:

    """
    An RGBA pixel buffer.
    The data is a 3d numpy array of shape (width, height, 4) and dtype uint8, indexed
    [x, y] like the rest of the drawing code, so a Rectangle's as_slice() can be
    used directly on it.

    Writing to disjoint rectangles from several threads at once is fine, since
    each write only touches its own part of the array. Subclasses wrapping some
    other kind of buffer should set disjoint_writes to False if that's not true
    for them, and the renderer will then process regions one at a time.
    """

    dtype = np.uint8
    disjoint_writes = True

    def __init__(self, size: Tuple[int, int]=None, data: np.ndarray=None):
        if data is not None:
            assert data.ndim == 3 and data.shape[2] == 4, "Surface data must be (w, h, 4)."
            self.data = data
        else:
            assert size is not None, "Surface size must be specified."
            w, h = size
            self.data = np.zeros((w, h, 4), dtype=self.dtype)
        self.size = self.data.shape[:2]

    @property
    def rect(self) -> Rectangle:
        return Rectangle(size=self.size)

    def __getitem__(self, point: Tuple[int, int]) -> Tuple[int, int, int, int]:
        x, y = point
        return tuple(int(c) for c in self.data[x, y])

    def __setitem__(self, point: Tuple[int, int], color):
        x, y = point
        self.data[x, y] = color

    def fill(self, color, rect: Rectangle=None):
        rect = self.rect.intersect(rect or self.rect)
        if rect:
            self.data[rect.as_slice()] = color
        return rect

    def get_subimage(self, rect: Rectangle) -> np.ndarray:
        """
        Return a section of the surface.
        Note that this is a view, not a copy.
        """
        return self.data[rect.as_slice()]

    def copy_region(self, source: "Surface", rect: Rectangle, offset: Tuple[int, int]=(0, 0)):
        """
        Copy the given rectangle from the source, where source pixel (x - dx, y - dy)
        ends up at (x, y). Both the rect and the shifted rect must be inside the
        respective surfaces.
        """
        dx, dy = offset
        self.data[rect.as_slice()] = source.data[rect.offset(-dx, -dy).as_slice()]

    def get_bilinear_sample(self, u: float, v: float) -> Tuple[int, int, int, int]:
        "Interpolated color at the given, possibly fractional, position."
        pixels = self.sample_bilinear(np.array([u], dtype=np.float64), v)
        return tuple(int(c) for c in pixels[0])

    def sample_bilinear(self, us: np.ndarray, v: float) -> np.ndarray:
        """
        Sample a horizontal run of points at height v, weighting the four nearest pixels
        of each. Coordinates outside the surface are clamped to the edge.
        Integer positions give back the exact pixel values.
        """
        w, h = self.size
        us = np.clip(np.asarray(us, dtype=np.float64), 0, w - 1)
        v = min(max(float(v), 0), h - 1)

        x0 = np.floor(us).astype(np.intp)
        x1 = np.minimum(x0 + 1, w - 1)
        y0 = int(np.floor(v))
        y1 = min(y0 + 1, h - 1)
        fx = (us - x0)[:, None]
        fy = v - y0

        data = self.data
        top = data[x0, y0] * (1 - fx) + data[x1, y0] * fx
        bottom = data[x0, y1] * (1 - fx) + data[x1, y1] * fx
        result = top * (1 - fy) + bottom * fy
        return np.rint(result).astype(self.dtype)

    def __repr__(self):
        return f"Surface(id={id(self)}, size={self.size})"
