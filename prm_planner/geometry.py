import math
from dataclasses import dataclass
from typing import Sequence

from .models import Circle, Point, Rectangle


# Safety margin added to every obstacle boundary
CLEARANCE = 0.1


@dataclass(frozen=True)
class Vector:
    """2D vector, used for the rectangle containment test."""

    x: float
    y: float

    @classmethod
    def between(cls, head: Point, tail: Point) -> "Vector":
        """Vector pointing from `tail` to `head`."""
        return cls(head.x - tail.x, head.y - tail.y)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector") -> float:
        return self.x * other.y - self.y * other.x

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def cos_theta(self, other: "Vector") -> float:
        """Cosine of the angle with `other`; 0.0 if either vector is null."""
        denom = self.magnitude() * other.magnitude()
        if denom == 0.0:
            return 0.0
        return self.dot(other) / denom

    def angle(self, other: "Vector") -> float:
        # Clamp against rounding slightly outside [-1, 1]
        return math.acos(max(-1.0, min(1.0, self.cos_theta(other))))


def dist(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def point_in_circle(p: Point, circle: Circle, clearance: float = CLEARANCE) -> bool:
    return dist(p, circle.center) <= circle.radius + clearance


def point_in_rectangle(p: Point, rect: Rectangle, clearance: float = CLEARANCE) -> bool:
    """Check if `p` lies inside `rect` grown by `clearance`.

    The point-to-center vector is projected on the rectangle's local axes
    (magnitude times cosine of the angle to each axis) and compared with the
    half extents. With `angle == 0` this is the axis-aligned test.
    """
    ca = Vector.between(p, rect.center)
    # Local unit axes: width along (cos, sin), height along (-sin, cos)
    cl = Vector(math.cos(rect.angle), math.sin(rect.angle))
    ck = Vector(-math.sin(rect.angle), math.cos(rect.angle))

    magnitude = ca.magnitude()
    along_height = abs(magnitude * ck.cos_theta(ca))
    along_width = abs(magnitude * cl.cos_theta(ca))
    return (along_height <= rect.half_height + clearance and
            along_width <= rect.half_width + clearance)


def segments_intersect(
    x1: float, y1: float, x2: float, y2: float,
    x3: float, y3: float, x4: float, y4: float,
) -> bool:
    """Check if segment (x1,y1)-(x2,y2) crosses segment (x3,y3)-(x4,y4).

    Both segment parameters must lie in [0, 1] and the intersection point
    must lie strictly inside the bounding box of the first segment, so
    touching at an endpoint does not count. Parallel, collinear and
    zero-length segments never intersect.
    """
    dxb = x2 - x1
    dyb = y2 - y1
    dxa = x4 - x3
    dya = y4 - y3

    denom = -dxa * dyb + dxb * dya
    if denom == 0.0:
        return False

    s = (-dyb * (x1 - x3) + dxb * (y1 - y3)) / denom
    t = (dxa * (y1 - y3) - dya * (x1 - x3)) / denom
    if not (math.isfinite(s) and math.isfinite(t)):
        return False

    if 0.0 <= s <= 1.0 and 0.0 <= t <= 1.0:
        xi = x1 + t * dxb
        yi = y1 + t * dyb
        return (min(x1, x2) < xi < max(x1, x2) and
                min(y1, y2) < yi < max(y1, y2))
    return False


def path_length(path: Sequence[Point]) -> float:
    """Calculate total length of a polyline."""
    total = 0.0
    for i in range(len(path) - 1):
        total += dist(path[i], path[i + 1])
    return total
