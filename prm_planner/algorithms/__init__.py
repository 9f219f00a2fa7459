"""Path planning algorithms."""

from .astar import (
    SearchNode,
    SearchResult,
    astar_search,
)
from .roadmap import RoadmapNode
from .prm import (
    # Parameters
    PRMParams,

    # Data structures
    PRMResult,

    # Planner
    PRMPlanner,

    # Errors
    PlanningFailed,
    SamplingExhausted,
)

__all__ = [
    "SearchNode",
    "SearchResult",
    "astar_search",
    "RoadmapNode",
    "PRMParams",
    "PRMResult",
    "PRMPlanner",
    "PlanningFailed",
    "SamplingExhausted",
]
