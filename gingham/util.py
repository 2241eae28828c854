import re
from typing import Tuple


Color = Tuple[int, int, int, int]

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def color_from_int(value: int) -> Color:
    "Opaque color from a 0xRRGGBB integer."
    return (value >> 16) & 0xff, (value >> 8) & 0xff, value & 0xff, 255


def with_alpha(color: Color, alpha: int) -> Color:
    r, g, b, _ = color
    return r, g, b, alpha


def parse_color(spec: str) -> Color:
    """
    >>> parse_color("#ff8000")
    (255, 128, 0, 255)
    >>> parse_color("0x0000ff")
    (0, 0, 255, 255)
    >>> parse_color("10, 20, 30")
    (10, 20, 30, 255)
    """
    spec = spec.strip()
    m = re.fullmatch(r"(?:#|0x)([0-9a-fA-F]{6})", spec)
    if m:
        return color_from_int(int(m.group(1), 16))
    m = re.fullmatch(r"(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", spec)
    if m:
        rgb = [int(v) for v in m.groups()]
        if all(0 <= v <= 255 for v in rgb):
            return (*rgb, 255)
    raise ValueError(f"Could not understand '{spec}' as a color.")
