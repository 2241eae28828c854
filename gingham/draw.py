"""
Drawing primitives working on [x, y, rgba] ordered uint8 arrays.
Like the other drawing helpers they return the rectangle that was changed,
or None if nothing was.
"""

from typing import Optional, Tuple

import numpy as np

from .brush import Brush
from .rect import Rectangle


def composite(dest: np.ndarray, source: np.ndarray):
    "Paint source over dest in place, using the source alpha."
    alpha = source[..., 3:4].astype(np.uint32)
    if np.all(alpha == 255):
        dest[:] = source
        return
    inverse = 255 - alpha
    src = source[..., :3].astype(np.uint32)
    dst = dest[..., :3].astype(np.uint32)
    dest[..., :3] = (src * alpha + dst * inverse + 127) // 255
    dst_alpha = dest[..., 3:4].astype(np.uint32)
    dest[..., 3:4] = alpha + (dst_alpha * inverse + 127) // 255


def paint(data: np.ndarray, rect: Rectangle, brush: Brush,
          origin: Tuple[int, int]=(0, 0)) -> Optional[Rectangle]:
    "Fill a rectangle with the brush. Patterns are aligned to the given origin."
    w, h = data.shape[:2]
    rect = Rectangle(size=(w, h)).intersect(rect)
    if not rect:
        return None
    ox, oy = origin
    pixels = brush.get_draw_data(rect.size, phase=(rect.x - ox, rect.y - oy))
    composite(data[rect.as_slice()], pixels)
    return rect


def line_rect(p0: Tuple[int, int], p1: Tuple[int, int], width: int) -> Rectangle:
    """
    The pixels covered by a straight pen stroke with flat caps.
    Across the line the pen covers [c - width // 2, c - width // 2 + width) around the
    center coordinate c, along it [start, end).
    Only horizontal and vertical lines are supported.
    """
    x0, y0 = p0
    x1, y1 = p1
    half = width // 2
    if y0 == y1:
        x0, x1 = sorted((x0, x1))
        return Rectangle((x0, y0 - half), (x1 - x0, width))
    elif x0 == x1:
        y0, y1 = sorted((y0, y1))
        return Rectangle((x0 - half, y0), (width, y1 - y0))
    raise ValueError(f"Only axis aligned lines can be drawn, got {p0} -> {p1}.")


def draw_line(data: np.ndarray, brush: Brush, p0: Tuple[int, int], p1: Tuple[int, int],
              width: int, *, clip: Rectangle=None,
              origin: Tuple[int, int]=(0, 0)) -> Optional[Rectangle]:
    rect = line_rect(p0, p1, width)
    if clip is not None:
        rect = rect.intersect(clip)
    if not rect:
        return None
    return paint(data, rect, brush, origin)
