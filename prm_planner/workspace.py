import logging
from typing import List, Optional, Sequence, Tuple, Union

from .geometry import point_in_circle, point_in_rectangle
from .models import Bounds, Circle, Point, Rectangle
from .route import Route

logger = logging.getLogger(__name__)

Obstacle = Union[Circle, Rectangle]


class Workspace:
    """Planning world: bounds, start/goal, static obstacles and peer routes.

    The peer-route registry is the only mutable part. It is keyed by owner
    id: inserting a route for a known owner replaces the previous one.
    The class does no locking; concurrent planning sessions should each work
    on their own `snapshot()`.
    """

    def __init__(
        self,
        bounds: Bounds,
        start: Point,
        goal: Point,
        circles: Optional[Sequence[Circle]] = None,
        rectangles: Optional[Sequence[Rectangle]] = None,
        routes: Optional[Sequence[Route]] = None,
    ):
        self.bounds = bounds
        self.start = start
        self.goal = goal
        self.circles: List[Circle] = list(circles or [])
        self.rectangles: List[Rectangle] = list(rectangles or [])
        self._routes: List[Route] = []
        for route in routes or []:
            self.upsert_route(route)

    def __repr__(self) -> str:
        return (f"Workspace(bounds={self.bounds}, start={self.start}, goal={self.goal}, "
                f"circles={len(self.circles)}, rectangles={len(self.rectangles)}, "
                f"routes={len(self._routes)})")

    @property
    def obstacles(self) -> List[Obstacle]:
        return [*self.circles, *self.rectangles]

    def in_bounds(self, x: float, y: float) -> bool:
        return self.bounds.contains(x, y)

    # =========================================================================
    # Collision queries
    # =========================================================================

    def collides_with_point(self, x: float, y: float) -> bool:
        """Check if (x, y) is inside any obstacle grown by the clearance."""
        p = Point(x, y)
        for circle in self.circles:
            if point_in_circle(p, circle):
                return True
        for rect in self.rectangles:
            if point_in_rectangle(p, rect):
                return True
        return False

    def collides_with_any_route(self, x1: float, y1: float, x2: float, y2: float) -> bool:
        """Check if segment (x1,y1)-(x2,y2) crosses any registered peer route."""
        for route in self._routes:
            if route.segment_intersects(x1, y1, x2, y2):
                return True
        return False

    # =========================================================================
    # Peer-route registry
    # =========================================================================

    @property
    def routes(self) -> Tuple[Route, ...]:
        return tuple(self._routes)

    def get_route(self, owner_id: str) -> Optional[Route]:
        for route in self._routes:
            if route.owner_id == owner_id:
                return route
        return None

    def upsert_route(self, route: Route) -> None:
        """Replace the route with the same owner id, or append it."""
        for i, existing in enumerate(self._routes):
            if existing.owner_id == route.owner_id:
                self._routes[i] = route
                logger.debug("Replaced route of %s (%d points)", route.owner_id, len(route))
                return
        self._routes.append(route)
        logger.debug("Registered route of %s (%d points)", route.owner_id, len(route))

    def remove_route(self, owner_id: str) -> bool:
        for i, existing in enumerate(self._routes):
            if existing.owner_id == owner_id:
                del self._routes[i]
                return True
        return False

    def clear_routes(self) -> None:
        self._routes.clear()

    def snapshot(self) -> "Workspace":
        """Copy sharing the static obstacles but owning its route registry."""
        return Workspace(
            bounds=self.bounds,
            start=self.start,
            goal=self.goal,
            circles=self.circles,
            rectangles=self.rectangles,
            routes=self._routes,
        )
