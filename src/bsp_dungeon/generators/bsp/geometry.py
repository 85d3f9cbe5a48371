"""
Shared 2D geometry for the BSP dungeon generator.

All coordinates are integers on the dungeon plane. X grows to the right and
Y grows "up" (towards the far end of the dungeon length), so a rectangle is
fully described by its bottom-left and top-right corners.
"""

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Tuple


class Orientation(Enum):
    """Orientation of a line dividing a partition"""
    HORIZONTAL = auto()  # Line runs along X, splits the Y range
    VERTICAL = auto()    # Line runs along Y, splits the X range


class RelativePosition(Enum):
    """Where one structure lies when seen from another"""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class Point:
    """Integer point on the dungeon plane"""
    x: int
    y: int

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class SplitLine:
    """Line dividing a partition into two children.

    Only the coordinate matching the orientation is meaningful: the Y value
    for horizontal lines and the X value for vertical ones.
    """
    orientation: Orientation
    coordinate: int


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle defined by its bottom-left and top-right corners.

    Raises:
        ValueError: If the corners are inverted on either axis
    """
    bottom_left: Point
    top_right: Point

    def __post_init__(self):
        if self.bottom_left.x > self.top_right.x or self.bottom_left.y > self.top_right.y:
            raise ValueError(
                f"Inverted rectangle: bottom_left={self.bottom_left.as_tuple()} "
                f"top_right={self.top_right.as_tuple()}"
            )

    @classmethod
    def from_bounds(cls, x1: int, y1: int, x2: int, y2: int) -> 'Rectangle':
        """Build a rectangle from its edge coordinates"""
        return cls(Point(x1, y1), Point(x2, y2))

    @classmethod
    def from_size(cls, width: int, length: int) -> 'Rectangle':
        """Rectangle anchored at the origin"""
        return cls(Point(0, 0), Point(width, length))

    @property
    def bottom_right(self) -> Point:
        return Point(self.top_right.x, self.bottom_left.y)

    @property
    def top_left(self) -> Point:
        return Point(self.bottom_left.x, self.top_right.y)

    @property
    def x1(self) -> int:
        """Left edge X coordinate"""
        return self.bottom_left.x

    @property
    def y1(self) -> int:
        """Bottom edge Y coordinate"""
        return self.bottom_left.y

    @property
    def x2(self) -> int:
        """Right edge X coordinate"""
        return self.top_right.x

    @property
    def y2(self) -> int:
        """Top edge Y coordinate"""
        return self.top_right.y

    @property
    def width(self) -> int:
        return self.top_right.x - self.bottom_left.x

    @property
    def length(self) -> int:
        return self.top_right.y - self.bottom_left.y

    @property
    def area(self) -> int:
        return self.width * self.length

    @property
    def center(self) -> Tuple[float, float]:
        """Exact center point, not rounded"""
        return ((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in bottom-left, bottom-right, top-right, top-left order"""
        return (self.bottom_left, self.bottom_right, self.top_right, self.top_left)

    def contains(self, other: 'Rectangle') -> bool:
        """Check if other lies fully inside this rectangle (edges may touch)"""
        return (self.x1 <= other.x1 and other.x2 <= self.x2 and
                self.y1 <= other.y1 and other.y2 <= self.y2)

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if the interiors overlap; shared edges do not count"""
        return not (self.x2 <= other.x1 or self.x1 >= other.x2 or
                    self.y2 <= other.y1 or self.y1 >= other.y2)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            'bottom_left': {'x': self.x1, 'y': self.y1},
            'bottom_right': {'x': self.x2, 'y': self.y1},
            'top_left': {'x': self.x1, 'y': self.y2},
            'top_right': {'x': self.x2, 'y': self.y2},
        }


def middle_point(a: int, b: int) -> int:
    """Integer midpoint of two coordinates (rounded down)"""
    return (a + b) // 2


def angle_between(origin: Rectangle, target: Rectangle) -> float:
    """
    Angle in degrees from the center of origin to the center of target.

    Returns:
        Angle in the range (-180, 180]
    """
    ox, oy = origin.center
    tx, ty = target.center
    return math.degrees(math.atan2(ty - oy, tx - ox))


def classify_angle(angle: float) -> RelativePosition:
    """
    Map an angle onto one of four quadrants.

    [-45, 45) is right, [45, 135) is up, [-135, -45) is down and everything
    else is left.
    """
    if -45 <= angle < 45:
        return RelativePosition.RIGHT
    if 45 <= angle < 135:
        return RelativePosition.UP
    if -135 <= angle < -45:
        return RelativePosition.DOWN
    return RelativePosition.LEFT
