"""Small 2D geometry types: vectors, colours, rectangles and transformable shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class Vector2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector2:
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector2:
        return Vector2(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector2:
        magnitude = self.length()
        if magnitude == 0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / magnitude

    def angle(self) -> float:
        """Angle from the positive x axis, in radians."""
        return math.atan2(self.y, self.x)


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    BLACK: ClassVar[Color]
    WHITE: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    BLUE: ClassVar[Color]
    YELLOW: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    TRANSPARENT: ClassVar[Color]


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.YELLOW = Color(255, 255, 0)
Color.MAGENTA = Color(255, 0, 255)
Color.TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class FloatRect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    position: Vector2 = Vector2()
    size: Vector2 = Vector2()

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def right(self) -> float:
        return self.position.x + self.size.x

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.y

    def center(self) -> Vector2:
        return self.position + self.size / 2

    def _extent(self) -> tuple[float, float, float, float]:
        xs = (self.position.x, self.position.x + self.size.x)
        ys = (self.position.y, self.position.y + self.size.y)
        return min(xs), min(ys), max(xs), max(ys)

    def intersection(self, other: FloatRect) -> FloatRect | None:
        """Overlapping area of the two rectangles, or None when they do not overlap."""
        left1, top1, right1, bottom1 = self._extent()
        left2, top2, right2, bottom2 = other._extent()
        left = max(left1, left2)
        top = max(top1, top2)
        right = min(right1, right2)
        bottom = min(bottom1, bottom2)
        if left < right and top < bottom:
            return FloatRect(Vector2(left, top), Vector2(right - left, bottom - top))
        return None

    def intersects(self, other: FloatRect) -> bool:
        return self.intersection(other) is not None


class Transformable:
    """Something with a position, origin, scale and rotation (in radians)."""

    def __init__(
        self,
        position: Vector2 = Vector2(),
        origin: Vector2 = Vector2(),
        scale: Vector2 = Vector2(1.0, 1.0),
        rotation: float = 0.0,
    ) -> None:
        self.position = position
        self.origin = origin
        self.scale = scale
        self.rotation = rotation

    @property
    def rotation(self) -> float:
        return self._rotation

    @rotation.setter
    def rotation(self, radians: float) -> None:
        self._rotation = radians % math.tau

    def local_bounds(self) -> FloatRect:
        return FloatRect()

    def move(self, offset: Vector2) -> None:
        self.position = self.position + offset

    def rotate(self, radians: float) -> None:
        self.rotation = self.rotation + radians

    def transform_point(self, point: Vector2) -> Vector2:
        """Map a point from local coordinates to world coordinates."""
        local_x = (point.x - self.origin.x) * self.scale.x
        local_y = (point.y - self.origin.y) * self.scale.y
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        return Vector2(
            self.position.x + local_x * cos_r - local_y * sin_r,
            self.position.y + local_x * sin_r + local_y * cos_r,
        )

    def corners(self) -> tuple[Vector2, Vector2, Vector2, Vector2]:
        """Transformed corners: top left, top right, bottom left, bottom right."""
        bounds = self.local_bounds()
        return (
            self.transform_point(Vector2(bounds.left, bounds.top)),
            self.transform_point(Vector2(bounds.right, bounds.top)),
            self.transform_point(Vector2(bounds.left, bounds.bottom)),
            self.transform_point(Vector2(bounds.right, bounds.bottom)),
        )

    def global_bounds(self) -> FloatRect:
        points = self.corners()
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return FloatRect(
            Vector2(min(xs), min(ys)),
            Vector2(max(xs) - min(xs), max(ys) - min(ys)),
        )


class RectangleShape(Transformable):
    """A filled rectangle."""

    def __init__(
        self,
        size: Vector2 = Vector2(),
        fill_color: Color = Color.WHITE,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.size = size
        self.fill_color = fill_color

    def local_bounds(self) -> FloatRect:
        return FloatRect(Vector2(), self.size)


@dataclass
class Vertex:
    """A coloured, textured point of a triangle."""

    position: Vector2 = Vector2()
    color: Color = field(default_factory=lambda: Color.WHITE)
    tex_coords: Vector2 = Vector2()