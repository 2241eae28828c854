"""
Integer rectangles, used for selections, regions and dirty areas.
Coordinates follow the surface convention: x to the right, y downwards,
and the rectangle covers [x0, x0 + w) x [y0, y0 + h).
"""

from typing import Optional, Tuple


class Rectangle:

    __slots__ = ("position", "size")

    def __init__(self, position: Tuple[int, int]=(0, 0), size: Tuple[int, int]=(0, 0)):
        x, y = position
        w, h = size
        self.position = (int(x), int(y))
        self.size = (max(0, int(w)), max(0, int(h)))

    @property
    def x(self):
        return self.position[0]

    @property
    def y(self):
        return self.position[1]

    left = x
    top = y

    @property
    def width(self):
        return self.size[0]

    @property
    def height(self):
        return self.size[1]

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def topleft(self):
        return self.position

    @property
    def bottomright(self):
        return self.right, self.bottom

    @property
    def points(self):
        "Position and size in one tuple."
        return (*self.position, *self.size)

    def area(self) -> int:
        w, h = self.size
        return w * h

    def as_slice(self) -> Tuple[slice, slice]:
        "Index into a [x, y] ordered array."
        return slice(self.x, self.right), slice(self.y, self.bottom)

    def offset(self, dx: int, dy: int) -> "Rectangle":
        return Rectangle((self.x + dx, self.y + dy), self.size)

    def intersect(self, other: Optional["Rectangle"]) -> Optional["Rectangle"]:
        "Return the overlapping part, or None if there isn't any."
        if other is None:
            return None
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.right, other.right)
        y1 = min(self.bottom, other.bottom)
        if x1 <= x0 or y1 <= y0:
            return None
        return Rectangle((x0, y0), (x1 - x0, y1 - y0))

    def unite(self, other: Optional["Rectangle"]) -> "Rectangle":
        "Return the smallest rectangle covering both."
        if not other:
            return self
        if not self:
            return other
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        x1 = max(self.right, other.right)
        y1 = max(self.bottom, other.bottom)
        return Rectangle((x0, y0), (x1 - x0, y1 - y0))

    def contains(self, other: "Rectangle") -> bool:
        return (self.x <= other.x and self.y <= other.y
                and other.right <= self.right and other.bottom <= self.bottom)

    def __iter__(self):
        return iter(self.points)

    def __bool__(self):
        return self.area() > 0

    def __eq__(self, other):
        if not isinstance(other, Rectangle):
            return NotImplemented
        return self.position == other.position and self.size == other.size

    def __hash__(self):
        return hash((self.position, self.size))

    def __repr__(self):
        return f"Rectangle(position={self.position}, size={self.size})"

