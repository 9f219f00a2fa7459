import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .geometry import path_length, segments_intersect
from .models import Point


@dataclass(frozen=True)
class Route:
    """Ordered polyline claimed by an agent.

    Attributes:
        points: Waypoints from start to goal.
        owner_id: Identifier of the agent owning the route. The planner
            leaves it unset; callers attach it before publishing.
    """

    points: List[Point] = field(default_factory=list)
    owner_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def length(self) -> float:
        return path_length(self.points)

    def segment_intersects(self, x1: float, y1: float, x2: float, y2: float) -> bool:
        """Check if segment (x1,y1)-(x2,y2) crosses any segment of this route."""
        for a, b in zip(self.points, self.points[1:]):
            if segments_intersect(x1, y1, x2, y2, a.x, a.y, b.x, b.y):
                return True
        return False

    def collides_with(self, other: "Route") -> bool:
        """Check every segment pair of the two routes for a crossing."""
        for a, b in zip(self.points, self.points[1:]):
            if other.segment_intersects(a.x, a.y, b.x, b.y):
                return True
        return False

    # =========================================================================
    # Interchange
    # =========================================================================

    def to_json(self) -> str:
        """Encode the points as `[{"x": .., "y": ..}, ...]` (owner not included)."""
        return json.dumps([p.to_dict() for p in self.points])

    @classmethod
    def from_json(cls, text: str, owner_id: Optional[str] = None) -> "Route":
        return cls(points=_decode_points(json.loads(text)), owner_id=owner_id)

    def to_dict(self) -> Dict[str, Any]:
        """Peer-route record `{"ownerId": .., "points": [..]}`."""
        return {"ownerId": self.owner_id, "points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        return cls(points=_decode_points(data["points"]), owner_id=data.get("ownerId"))


def routes_collide(a: Route, b: Route) -> bool:
    """Pairwise exact intersection test, O(len(a) * len(b))."""
    return a.collides_with(b)


def _decode_points(items: List[Dict[str, Any]]) -> List[Point]:
    return [Point(float(item["x"]), float(item["y"])) for item in items]
