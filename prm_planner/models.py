from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Point:
    """Represents a 2D point."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Bounds:
    """Rectangular workspace limits."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True)
class Circle:
    """Represents a circular obstacle.

    Attributes:
        center: Center of the circle.
        radius: Radius of the circle (clearance not included).
    """

    center: Point
    radius: float


@dataclass(frozen=True)
class Rectangle:
    """Represents a rectangular obstacle.

    Attributes:
        center: Center of the rectangle.
        width: Extent along the rectangle's local X axis.
        height: Extent along the rectangle's local Y axis.
        angle: Counter-clockwise rotation in radians (0 = axis-aligned).
    """

    center: Point
    width: float
    height: float
    angle: float = 0.0

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2
