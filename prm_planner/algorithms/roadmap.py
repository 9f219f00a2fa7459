from typing import Iterator, List, Tuple

from ..geometry import dist
from ..models import Point


class RoadmapNode:
    """Roadmap vertex: a point plus its adjacency list.

    Implements the `SearchNode` capability with Euclidean heuristic and edge
    costs. Equality is identity, two nodes at the same coordinates stay
    distinct vertices.
    """

    __slots__ = ("point", "edges")

    def __init__(self, point: Point):
        self.point = point
        self.edges: List["RoadmapNode"] = []

    def __repr__(self) -> str:
        return f"RoadmapNode({self.point.x:.3f}, {self.point.y:.3f}, degree={self.degree})"

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    @property
    def degree(self) -> int:
        return len(self.edges)

    def add_edge(self, other: "RoadmapNode") -> None:
        """Append `other` to the adjacency list. The caller adds the reciprocal edge."""
        self.edges.append(other)

    def remove_edge(self, other: "RoadmapNode") -> None:
        """Delete every adjacency entry pointing to `other`."""
        self.edges = [e for e in self.edges if e is not other]

    def is_linked(self, other: "RoadmapNode") -> bool:
        return any(e is other for e in self.edges)

    def heuristic(self, target: "RoadmapNode") -> float:
        return dist(self.point, target.point)

    def neighbors(self) -> Iterator[Tuple["RoadmapNode", float]]:
        for e in self.edges:
            yield e, dist(self.point, e.point)
