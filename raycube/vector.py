"""Two-dimensional vectors and the four screen directions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


class Direction(IntEnum):
    """A compass direction in screen coordinates (y grows downwards).

    The values double as indices into the north/south/west/east texture list.
    """

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    NONE = 4


@dataclass(frozen=True)
class Vector:
    """An immutable 2D vector of floats."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vector:
        return Vector(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector:
        return Vector(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def dot(self, other: Vector) -> float:
        """Return the scalar product with another vector."""
        return self.x * other.x + self.y * other.y

    def rotate(self, angle: float) -> Vector:
        """Return this vector rotated by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def perp(self) -> Vector:
        """Return the vector turned a quarter turn: (-y, x)."""
        return Vector(-self.y, self.x)

    def distance_squared(self, other: Vector) -> float:
        """Return the squared distance between two points."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2


_DIRECTION_VECTORS = {
    Direction.UP: Vector(0.0, -1.0),
    Direction.DOWN: Vector(0.0, 1.0),
    Direction.LEFT: Vector(-1.0, 0.0),
    Direction.RIGHT: Vector(1.0, 0.0),
    Direction.NONE: Vector(0.0, 0.0),
}


def direction_vector(direction: Direction) -> Vector:
    """Return the unit vector of a direction in screen coordinates."""
    return _DIRECTION_VECTORS[Direction(direction)]