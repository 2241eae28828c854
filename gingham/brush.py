from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
import logging
from typing import Optional, Tuple

import numpy as np

from .util import Color, WHITE, with_alpha


logger = logging.getLogger(__name__)


class LineStyle(IntEnum):

    "How one family of lines (horizontal or vertical) is filled."

    SOLID_33 = 0
    SOLID_66 = 1
    DIAGONAL_UP = 2
    DIAGONAL_DOWN = 3
    DOTS = 4

    @property
    def label(self):
        return STYLE_LABELS[self]

    @classmethod
    def from_string(cls, name: str) -> "LineStyle":
        "Accepts the enum name (case insensitive, dashes allowed) or its number."
        name = name.strip()
        if name.isdigit():
            return cls(int(name))
        return cls[name.upper().replace("-", "_")]


STYLE_LABELS = {
    LineStyle.SOLID_33: "Solid - 33% Opacity",
    LineStyle.SOLID_66: "Solid - 66% Opacity",
    LineStyle.DIAGONAL_UP: "Diagonal Lines - Up",
    LineStyle.DIAGONAL_DOWN: "Diagonal Lines - Down",
    LineStyle.DOTS: "Dots - 50/50",
}


# Hatches repeat every HATCH_PERIOD pixels, with lines HATCH_PERIOD // 2 pixels wide.
HATCH_PERIOD = 4


@dataclass(frozen=True)
class Brush:

    """
    A fill for pen strokes. Without a pattern it's a flat color, possibly translucent.
    With a pattern (a boolean mask that tiles the plane) the foreground goes where the
    mask is set and the background everywhere else.
    """

    foreground: Color
    background: Optional[Color] = None
    pattern: Optional[np.ndarray] = None

    @property
    def opaque(self):
        if self.pattern is None:
            return self.foreground[3] == 255
        return self.foreground[3] == 255 and self.background[3] == 255

    def get_draw_data(self, size: Tuple[int, int], phase: Tuple[int, int]=(0, 0)) -> np.ndarray:
        """
        RGBA pixels for an area of the given size. The phase is the position of the
        area's top left corner relative to the pattern origin, so that neighbouring
        areas line up seamlessly.
        """
        w, h = size
        if self.pattern is None:
            data = np.empty((w, h, 4), dtype=np.uint8)
            data[:] = self.foreground
            return data
        pw, ph = self.pattern.shape
        px, py = phase
        xs = (np.arange(w) + px) % pw
        ys = (np.arange(h) + py) % ph
        mask = self.pattern[np.ix_(xs, ys)]
        return np.where(mask[..., None],
                        np.array(self.foreground, dtype=np.uint8),
                        np.array(self.background, dtype=np.uint8))

    def __hash__(self):
        pattern = None if self.pattern is None else self.pattern.tobytes()
        return hash((self.foreground, self.background, pattern))

    def __eq__(self, other):
        if not isinstance(other, Brush):
            return NotImplemented
        if (self.pattern is None) != (other.pattern is None):
            return False
        return (self.foreground == other.foreground
                and self.background == other.background
                and (self.pattern is None or np.array_equal(self.pattern, other.pattern)))


@lru_cache(8)
def make_hatch(style: LineStyle) -> np.ndarray:
    "Boolean mask for one period of the given hatch style, indexed [x, y]."
    x, y = np.indices((HATCH_PERIOD, HATCH_PERIOD))
    if style == LineStyle.DIAGONAL_UP:
        # Rising to the right means x + y is constant along a line, since y points down
        mask = (x + y) % HATCH_PERIOD < HATCH_PERIOD // 2
    elif style == LineStyle.DIAGONAL_DOWN:
        mask = (x - y) % HATCH_PERIOD < HATCH_PERIOD // 2
    elif style == LineStyle.DOTS:
        mask = (x + y) % 2 == 0
    else:
        raise ValueError(f"{style!r} is not a hatch style.")
    mask.setflags(write=False)
    return mask


def resolve_brush(style, color: Color) -> Brush:
    """
    Pick the fill for a line style. Anything unrecognized gets the 33% solid fill,
    so that a bad style value never stops the pattern from being drawn.
    """
    if style == LineStyle.SOLID_33:
        return Brush(with_alpha(color, 85))
    elif style == LineStyle.SOLID_66:
        return Brush(with_alpha(color, 170))
    elif style in (LineStyle.DIAGONAL_UP, LineStyle.DIAGONAL_DOWN, LineStyle.DOTS):
        return Brush(with_alpha(color, 255), WHITE, make_hatch(LineStyle(int(style))))
    logger.warning("Unknown line style %r, using %s", style, LineStyle.SOLID_33.label)
    return Brush(with_alpha(color, 85))
