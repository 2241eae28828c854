"""
Gingham pattern generation.

The pattern consists of evenly spaced horizontal and vertical lines, one line
width wide with one line width of space between them. Each direction has its
own fill style, and wherever two lines cross the square is painted with the
plain, opaque color. That's what makes it look like woven fabric, where the
overlapping threads come out solid.
"""

from dataclasses import dataclass
import logging
from math import ceil
from typing import Tuple

from .brush import Brush, LineStyle, resolve_brush
from .draw import draw_line
from .rect import Rectangle
from .surface import Surface
from .util import Color, BLACK, WHITE, with_alpha


logger = logging.getLogger(__name__)


MIN_LINE_WIDTH = 2
MAX_LINE_WIDTH = 100


@dataclass(frozen=True)
class StyleParameters:
    line_width: int = 20
    color: Color = BLACK
    horizontal_style: LineStyle = LineStyle.DIAGONAL_UP
    vertical_style: LineStyle = LineStyle.DOTS


@dataclass(frozen=True)
class PatternTile:

    """
    A finished pattern. Treat the surface as read-only; it's shared by all the
    render workers. Changing parameters means building a new tile.
    """

    surface: Surface
    selection: Rectangle
    params: StyleParameters

    @property
    def size(self):
        return self.surface.size

    def get_bilinear_sample(self, u, v):
        return self.surface.get_bilinear_sample(u, v)


def count_lines(length: int, line_width: int) -> int:
    "Number of lines needed to cover the length, including a final partial one."
    return ceil(length / line_width / 2)


def line_centers(start: int, length: int, line_width: int):
    return [start + line_width // 2 + line_width * i * 2
            for i in range(count_lines(length, line_width))]


def build_tile(selection: Rectangle, canvas_size: Tuple[int, int],
               params: StyleParameters) -> PatternTile:
    """
    Render the complete pattern for the selection into a new canvas sized surface.
    Line positions are relative to the selection's top left corner, and nothing is
    drawn outside of it. The rest of the surface is left fully transparent.
    """
    surface = Surface(canvas_size)
    data = surface.data
    lw = params.line_width
    color = params.color

    clip = surface.rect.intersect(selection)
    if not clip:
        logger.debug("Empty selection %r, nothing to draw", selection)
        return PatternTile(surface, selection, params)
    surface.fill(WHITE, clip)

    x0, y0 = selection.topleft
    x1, y1 = selection.bottomright
    h_brush = resolve_brush(params.horizontal_style, color)
    v_brush = resolve_brush(params.vertical_style, color)
    solid = Brush(with_alpha(color, 255))

    rows = line_centers(y0, selection.height, lw)
    columns = line_centers(x0, selection.width, lw)
    logger.debug("Building %dx%d tile: %d horizontal, %d vertical lines, width %d",
                  *surface.size, len(rows), len(columns), lw)

    for y in rows:
        draw_line(data, h_brush, (x0, y), (x1, y), lw, clip=clip, origin=(x0, y0))

    for x in columns:
        draw_line(data, v_brush, (x, y0), (x, y1), lw, clip=clip, origin=(x0, y0))

    # Intersections, drawn last so they cover both kinds of lines
    for y in rows:
        for i in range(len(columns)):
            start = x0 + lw * 2 * i
            draw_line(data, solid, (start, y), (start + lw, y), lw, clip=clip)

    return PatternTile(surface, selection, params)
