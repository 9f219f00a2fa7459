"""PathPlanning_PRM - Multi-agent route planning with probabilistic roadmaps."""

from .loader import (
    InvalidWorkspace,
    WorkspaceParseError,
    load_routes,
    load_workspace,
    parse_routes,
    parse_workspace,
)
from .models import Bounds, Circle, Point, Rectangle
from .route import Route, routes_collide
from .workspace import Workspace
from .geometry import (
    CLEARANCE,
    Vector,
    dist,
    path_length,
    point_in_circle,
    point_in_rectangle,
    segments_intersect,
)

# Algorithms
from .algorithms import (
    SearchNode,
    SearchResult,
    astar_search,
    RoadmapNode,
    PRMParams,
    PRMResult,
    PRMPlanner,
    PlanningFailed,
    SamplingExhausted,
)

from .visualization import plot_workspace

# Utils
from .utils import (
    ExperimentResult,
    run_experiment,
    run_all_experiments,
    save_results_csv,
    print_results_summary,
)
