import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .models import Bounds, Circle, Point, Rectangle
from .route import Route
from .workspace import Workspace

logger = logging.getLogger(__name__)


class InvalidWorkspace(Exception):
    """Raised when a workspace snapshot or peer-route set fails validation."""
    pass


class WorkspaceParseError(Exception):
    """Raised when a workspace file cannot be read or decoded."""
    pass


def _read_json(filepath: Path) -> Any:
    """Read and decode a JSON file."""
    try:
        content = filepath.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceParseError(f"File not found: {filepath}")
    except PermissionError:
        raise WorkspaceParseError(f"Permission denied: {filepath}")

    if not content.strip():
        raise WorkspaceParseError(f"File is empty: {filepath}")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise WorkspaceParseError(f"Invalid JSON in {filepath}: {e}")


def _section(data: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise InvalidWorkspace(f"{where} must be an object, got {type(data).__name__}")
    if key not in data:
        raise InvalidWorkspace(f"{where} is missing field '{key}'")
    return data[key]


def _number(data: Mapping[str, Any], key: str, where: str) -> float:
    value = _section(data, key, where)
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidWorkspace(f"{where}.{key} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidWorkspace(f"{where}.{key} must be finite, got {value}")
    return value


def _point(data: Mapping[str, Any], where: str) -> Point:
    return Point(_number(data, "x", where), _number(data, "y", where))


def _list(data: Mapping[str, Any], key: str) -> List[Any]:
    # Obstacle sections may be omitted, but not malformed
    value = data.get(key, [])
    if not isinstance(value, list):
        raise InvalidWorkspace(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _parse_bounds(data: Mapping[str, Any]) -> Bounds:
    section = _section(data, "bounds", "workspace")
    bounds = Bounds(
        x_min=_number(section, "xMin", "bounds"),
        x_max=_number(section, "xMax", "bounds"),
        y_min=_number(section, "yMin", "bounds"),
        y_max=_number(section, "yMax", "bounds"),
    )
    if bounds.x_min >= bounds.x_max:
        raise InvalidWorkspace(f"xMin ({bounds.x_min}) must be lower than xMax ({bounds.x_max})")
    if bounds.y_min >= bounds.y_max:
        raise InvalidWorkspace(f"yMin ({bounds.y_min}) must be lower than yMax ({bounds.y_max})")
    return bounds


def _parse_circle(item: Mapping[str, Any], index: int) -> Circle:
    where = f"circles[{index}]"
    circle = Circle(
        center=Point(_number(item, "xCenter", where), _number(item, "yCenter", where)),
        radius=_number(item, "radius", where),
    )
    if circle.radius <= 0:
        raise InvalidWorkspace(f"{where}: radius must be positive, got {circle.radius}")
    return circle


def _parse_rectangle(item: Mapping[str, Any], index: int) -> Rectangle:
    where = f"rectangles[{index}]"
    if not isinstance(item, Mapping):
        raise InvalidWorkspace(f"{where} must be an object, got {type(item).__name__}")
    angle = _number(item, "angle", where) if "angle" in item else 0.0
    rect = Rectangle(
        center=Point(_number(item, "xCenter", where), _number(item, "yCenter", where)),
        width=_number(item, "width", where),
        height=_number(item, "height", where),
        angle=angle,
    )
    if rect.width <= 0:
        raise InvalidWorkspace(f"{where}: width must be positive, got {rect.width}")
    if rect.height <= 0:
        raise InvalidWorkspace(f"{where}: height must be positive, got {rect.height}")
    return rect


def _validate_point_in_bounds(p: Point, name: str, bounds: Bounds) -> None:
    if not bounds.contains(p.x, p.y):
        raise InvalidWorkspace(
            f"{name} ({p.x}, {p.y}) is outside workspace bounds "
            f"[{bounds.x_min}, {bounds.x_max}] x [{bounds.y_min}, {bounds.y_max}]"
        )


def parse_workspace(data: Mapping[str, Any]) -> Workspace:
    """Build a Workspace from a decoded snapshot.

    Args:
        data: Mapping with `start`, `goal`, `bounds` and optional `circles`,
            `rectangles` (and `routes`, a peer-route set).

    Returns:
        Workspace holding the obstacles and the peer routes, if any.

    Raises:
        InvalidWorkspace: If a field is missing, malformed or inconsistent.
    """
    bounds = _parse_bounds(data)
    start = _point(_section(data, "start", "workspace"), "start")
    goal = _point(_section(data, "goal", "workspace"), "goal")

    circles = [_parse_circle(item, i) for i, item in enumerate(_list(data, "circles"))]
    rectangles = [_parse_rectangle(item, i) for i, item in enumerate(_list(data, "rectangles"))]

    _validate_point_in_bounds(start, "start", bounds)
    _validate_point_in_bounds(goal, "goal", bounds)

    workspace = Workspace(bounds, start, goal, circles, rectangles)
    if "routes" in data:
        for route in parse_routes(data["routes"]):
            workspace.upsert_route(route)

    # Not an error: the planner reports failure for such workspaces
    for name, p in (("start", start), ("goal", goal)):
        if workspace.collides_with_point(p.x, p.y):
            logger.warning("%s (%s, %s) lies inside an obstacle", name, p.x, p.y)

    return workspace


def parse_routes(data: Any) -> List[Route]:
    """Decode a peer-route set `[{"ownerId": .., "points": [{x, y}, ..]}, ..]`."""
    if not isinstance(data, list):
        raise InvalidWorkspace(f"peer routes must be a list, got {type(data).__name__}")

    routes: List[Route] = []
    seen: Dict[str, int] = {}
    for i, item in enumerate(data):
        where = f"routes[{i}]"
        owner_id = _section(item, "ownerId", where)
        if not isinstance(owner_id, str) or not owner_id:
            raise InvalidWorkspace(f"{where}.ownerId must be a non-empty string, got {owner_id!r}")
        if owner_id in seen:
            raise InvalidWorkspace(f"{where}: duplicate ownerId '{owner_id}' (also routes[{seen[owner_id]}])")
        seen[owner_id] = i

        points = _section(item, "points", where)
        if not isinstance(points, list):
            raise InvalidWorkspace(f"{where}.points must be a list")
        routes.append(Route(
            points=[_point(p, f"{where}.points[{j}]") for j, p in enumerate(points)],
            owner_id=owner_id,
        ))
    return routes


def load_workspace(filepath: str | Path) -> Workspace:
    """Load a workspace snapshot from a JSON file.

    Raises:
        WorkspaceParseError: If the file cannot be read or decoded.
        InvalidWorkspace: If validation fails.
    """
    return parse_workspace(_read_json(Path(filepath)))


def load_routes(filepath: str | Path) -> List[Route]:
    """Load a peer-route set from a JSON file."""
    return parse_routes(_read_json(Path(filepath)))
