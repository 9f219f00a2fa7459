import math
from pathlib import Path
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .models import Point
from .route import Route
from .workspace import Workspace


def _rectangle_anchor(center: Point, width: float, height: float, angle: float) -> Tuple[float, float]:
    """Lower-left corner of a rectangle rotated by `angle` about its center."""
    c, s = math.cos(angle), math.sin(angle)
    dx, dy = -width / 2, -height / 2
    return (center.x + dx * c - dy * s, center.y + dx * s + dy * c)


def plot_workspace(
    workspace: Workspace,
    route: Optional[Route] = None,
    roadmap_edges: Optional[List[Tuple[Point, Point]]] = None,
    save_to: Optional[str | Path] = None,
    show: bool = True,
) -> Tuple[Figure, Axes]:
    """Plot the bounds, obstacles, peer routes, roadmap and optionally a route."""
    bounds = workspace.bounds
    start, goal = workspace.start, workspace.goal

    fontsize = 16

    # Initialize figure
    fig, ax = plt.subplots(figsize=(10, 10))

    # Add padding so points at boundaries are visible
    padding = max(bounds.width, bounds.height) * 0.02
    ax.set_xlim(bounds.x_min - padding, bounds.x_max + padding)
    ax.set_ylim(bounds.y_min - padding, bounds.y_max + padding)
    ax.set_aspect("equal")
    ax.grid(True, alpha=0.3)
    ax.tick_params(axis="both", labelsize=fontsize)

    # Draw workspace border
    border = patches.Rectangle(
        (bounds.x_min, bounds.y_min), bounds.width, bounds.height,
        linewidth=2,
        edgecolor="black",
        facecolor="none",
    )
    ax.add_patch(border)

    # Draw obstacles
    for circle in workspace.circles:
        ax.add_patch(patches.Circle(
            (circle.center.x, circle.center.y), circle.radius,
            linewidth=1,
            edgecolor="darkgray",
            facecolor="gray",
            alpha=0.7,
        ))
    for rect in workspace.rectangles:
        ax.add_patch(patches.Rectangle(
            _rectangle_anchor(rect.center, rect.width, rect.height, rect.angle),
            rect.width, rect.height,
            angle=math.degrees(rect.angle),
            linewidth=1,
            edgecolor="darkgray",
            facecolor="gray",
            alpha=0.7,
        ))

    # Draw roadmap (if provided)
    if roadmap_edges:
        for p1, p2 in roadmap_edges:
            ax.plot(
                [p1.x, p2.x], [p1.y, p2.y],
                color="lightblue",
                linewidth=0.5,
                alpha=0.5,
            )

    # Draw peer routes
    for peer in workspace.routes:
        if len(peer) < 2:
            continue
        xs = [p.x for p in peer]
        ys = [p.y for p in peer]
        ax.plot(xs, ys, color="red", linewidth=1.5, alpha=0.8, zorder=4)
        mid = peer.points[len(peer) // 2]
        ax.annotate(f"[{peer.owner_id}]", (mid.x, mid.y), fontsize=fontsize - 4, color="red")

    # Draw route (if provided)
    if route and len(route) >= 2:
        xs = [p.x for p in route]
        ys = [p.y for p in route]
        ax.plot(xs, ys, color="blue", linewidth=2, label="Route", zorder=5)

    # Draw start and goal
    ax.plot(
        start.x, start.y,
        marker="o",
        markersize=12,
        color="green",
        label="Start",
        zorder=10,
    )
    ax.plot(
        goal.x, goal.y,
        marker="*",
        markersize=15,
        color="red",
        label="Goal",
        zorder=10,
    )

    # Finalize
    ax.set_xlabel("X", fontsize=fontsize)
    ax.set_ylabel("Y", fontsize=fontsize)
    ax.set_title(f"Multi-Robot Workspace ({bounds.width:.0f} x {bounds.height:.0f})",
                 fontsize=fontsize + 4)
    ax.legend(loc="best", fontsize=fontsize)

    if save_to:
        fig.savefig(save_to, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig, ax
