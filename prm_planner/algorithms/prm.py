import logging
import math
import time
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np

from ..models import Bounds, Point
from ..route import Route
from ..workspace import Workspace
from .astar import astar_search
from .roadmap import RoadmapNode

logger = logging.getLogger(__name__)


class PlanningFailed(Exception):
    """Raised when the planner cannot produce a roadmap or is used out of order."""
    pass


class SamplingExhausted(PlanningFailed):
    """Raised when rejection sampling hits its cap before collecting enough nodes."""
    pass


@dataclass
class PRMParams:
    node_count: int = 1000            # Roadmap size
    k: int = 40                       # Connections per node
    step: float = 0.1                 # Collision sampling increment along segments
    max_attempts: int = 10            # Start/goal anchor pairs to try
    max_rejected_samples: int = 100_000
    seed: Optional[int] = None

    def __post_init__(self):
        if self.node_count <= 0:
            raise ValueError(f"node_count must be positive, got {self.node_count}")
        if self.k < 0:
            raise ValueError(f"k must be non-negative, got {self.k}")
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be non-negative, got {self.max_attempts}")
        if self.max_rejected_samples < 0:
            raise ValueError(
                f"max_rejected_samples must be non-negative, got {self.max_rejected_samples}"
            )


@dataclass
class PRMResult:
    route: Optional[Route]
    cost: float
    cpu_time: float
    attempts_used: int
    n_nodes: int
    n_edges: int
    failure_reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.route is not None


class PRMPlanner:
    """Probabilistic roadmap planner.

    Usage: `build_roadmap(workspace)` once, then `find_path(workspace)` as
    often as needed. A changed workspace (obstacles or peer routes) needs a
    new `build_roadmap` call; there is no incremental update.
    """

    def __init__(self, params: Optional[PRMParams] = None,
                 rng: Optional[np.random.Generator] = None):
        self.params = params if params is not None else PRMParams()
        self.rng = rng if rng is not None else np.random.default_rng(self.params.seed)

        self.nodes: List[RoadmapNode] = []
        self.edges: List[Tuple[int, int]] = []  # Node index pairs, for plotting
        self.step: float = self.params.step     # Step used by the last build
        self.attempts_used: int = 0
        self._coords = np.empty((0, 2))

    # =========================================================================
    # Geometry helpers
    # =========================================================================

    def _sample_uniform(self, bounds: Bounds) -> Point:
        x = float(self.rng.uniform(bounds.x_min, bounds.x_max))
        y = float(self.rng.uniform(bounds.y_min, bounds.y_max))
        return Point(x, y)

    def _rank_nodes(self, x: float, y: float) -> np.ndarray:
        """Node indices sorted by ascending distance to (x, y)."""
        d = np.hypot(self._coords[:, 0] - x, self._coords[:, 1] - y)
        return np.argsort(d, kind="stable")

    def is_collision_free_segment(
        self, workspace: Workspace,
        x1: float, y1: float, x2: float, y2: float,
        step: Optional[float] = None,
    ) -> bool:
        """Check segment (x1,y1)-(x2,y2) against obstacles and peer routes.

        Obstacles are tested at points spaced `step` apart from the start,
        plus the end point itself. The exact peer-route test runs once,
        after the whole sweep passed.
        """
        step = step if step is not None else self.step
        dx = x2 - x1
        dy = y2 - y1
        length = math.hypot(dx, dy)
        ang = math.atan2(dy, dx)
        kx = math.cos(ang)
        ky = math.sin(ang)

        pos = 0.0
        while pos < length:
            if workspace.collides_with_point(x1 + pos * kx, y1 + pos * ky):
                return False
            pos += step
        if workspace.collides_with_point(x2, y2):
            return False

        return not workspace.collides_with_any_route(x1, y1, x2, y2)

    # =========================================================================
    # Roadmap construction
    # =========================================================================

    def _sample_nodes(self, workspace: Workspace, node_count: int) -> int:
        """Fill `self.nodes` with collision-free samples; return rejections."""
        rejected = 0
        cap = self.params.max_rejected_samples
        while len(self.nodes) < node_count:
            p = self._sample_uniform(workspace.bounds)
            if workspace.collides_with_point(p.x, p.y):
                rejected += 1
                if rejected > cap:
                    collected = len(self.nodes)
                    self.nodes = []
                    logger.warning(
                        "Sampling gave up after %d rejected samples (%d/%d nodes collected)",
                        rejected, collected, node_count,
                    )
                    raise SamplingExhausted(
                        f"Only {collected} of {node_count} collision-free samples found "
                        f"before {cap} rejections; the workspace has little or no free space"
                    )
                continue
            self.nodes.append(RoadmapNode(p))
        return rejected

    def _connect_nodes(self, workspace: Workspace, k: int, step: float) -> None:
        for i, node in enumerate(self.nodes):
            connected = 0
            for j in self._rank_nodes(node.x, node.y):
                if connected >= k:
                    break
                j = int(j)
                if j == i:
                    continue
                other = self.nodes[j]
                if node.is_linked(other):
                    # Linked from the other side already
                    connected += 1
                    continue
                if self.is_collision_free_segment(workspace, node.x, node.y,
                                                  other.x, other.y, step):
                    node.add_edge(other)
                    other.add_edge(node)
                    self.edges.append((i, j))
                    connected += 1

    def build_roadmap(
        self, workspace: Workspace,
        node_count: Optional[int] = None,
        k: Optional[int] = None,
        step: Optional[float] = None,
    ) -> None:
        """Build a fresh roadmap for `workspace`.

        Args:
            workspace: Obstacles and peer routes to respect.
            node_count: Number of collision-free nodes to sample.
            k: Successful connections to aim for per node, nearest first.
            step: Sampling increment for edge collision checks, also used
                later by `find_path` to connect start and goal.

        Raises:
            ValueError: If an override is out of range.
            SamplingExhausted: If free space is too scarce to collect
                `node_count` samples within `max_rejected_samples` rejections.
        """
        # Overrides go through the same checks as PRMParams
        build = replace(
            self.params,
            node_count=node_count if node_count is not None else self.params.node_count,
            k=k if k is not None else self.params.k,
            step=step if step is not None else self.params.step,
        )
        node_count, k, step = build.node_count, build.k, build.step

        self.step = step
        self.nodes = []
        self.edges = []

        rejected = self._sample_nodes(workspace, node_count)
        self._coords = np.array([[n.x, n.y] for n in self.nodes])
        self._connect_nodes(workspace, k, step)

        logger.info(
            "Roadmap built: %d nodes, %d edges (%d samples rejected)",
            len(self.nodes), len(self.edges), rejected,
        )

    def roadmap_edges(self) -> List[Tuple[Point, Point]]:
        return [(self.nodes[a].point, self.nodes[b].point) for a, b in self.edges]

    # =========================================================================
    # Queries
    # =========================================================================

    def _find_anchors(self, workspace: Workspace, p: Point) -> List[RoadmapNode]:
        """Nodes joined to `p` by a collision-free straight segment, nearest first."""
        anchors = []
        for j in self._rank_nodes(p.x, p.y):
            node = self.nodes[int(j)]
            if self.is_collision_free_segment(workspace, node.x, node.y, p.x, p.y):
                anchors.append(node)
        return anchors

    def find_path(self, workspace: Workspace,
                  max_attempts: Optional[int] = None) -> Optional[Route]:
        """Plan a route from `workspace.start` to `workspace.goal`.

        The i-th closest start anchor and i-th closest goal anchor are
        joined with A* for i in [0, max_attempts); the first success is
        returned.

        Returns:
            Route [start, anchors..., goal] without owner id, or None when
            no attempt succeeds.

        Raises:
            PlanningFailed: If no roadmap has been built.
        """
        if not self.nodes:
            raise PlanningFailed("Roadmap is empty; call build_roadmap first")
        max_attempts = max_attempts if max_attempts is not None else self.params.max_attempts

        start, goal = workspace.start, workspace.goal
        start_anchors = self._find_anchors(workspace, start)
        goal_anchors = self._find_anchors(workspace, goal)
        logger.debug("Anchor candidates: %d at start, %d at goal",
                     len(start_anchors), len(goal_anchors))

        self.attempts_used = 0
        n_attempts = min(max_attempts, len(start_anchors), len(goal_anchors))
        for attempt in range(n_attempts):
            start_anchor = start_anchors[attempt]
            goal_anchor = goal_anchors[attempt]
            self.attempts_used = attempt + 1

            # Searching from the goal side lets the parent chain read start -> goal
            result = astar_search(goal_anchor, start_anchor)
            if result.found:
                chain = result.backtrack(start_anchor)
                route = Route(points=[start] + [n.point for n in chain] + [goal])
                logger.info("Found a route with %d points (length %.3f) at attempt %d",
                            len(route), route.length(), attempt)
                return route

            logger.debug("[Attempt# %d] Failed to find path, retrying", attempt)

        logger.info("No route found after %d attempts", n_attempts)
        return None

    def plan(self, workspace: Workspace) -> PRMResult:
        """Build the roadmap and query it once, with timing."""
        start_time = time.perf_counter()
        try:
            self.build_roadmap(workspace)
        except SamplingExhausted as e:
            return PRMResult(
                route=None,
                cost=float("inf"),
                cpu_time=time.perf_counter() - start_time,
                attempts_used=0,
                n_nodes=0,
                n_edges=0,
                failure_reason=str(e),
            )

        route = self.find_path(workspace)
        cpu_time = time.perf_counter() - start_time

        return PRMResult(
            route=route,
            cost=route.length() if route is not None else float("inf"),
            cpu_time=cpu_time,
            attempts_used=self.attempts_used,
            n_nodes=len(self.nodes),
            n_edges=len(self.edges),
            failure_reason=None if route is not None else "no anchor pair could be connected",
        )
