from prm_planner.models import Circle, Point, Rectangle
from prm_planner.route import Route


def _route(owner_id, coords):
    return Route(points=[Point(x, y) for x, y in coords], owner_id=owner_id)


def test_collides_with_point(workspace_factory):
    ws = workspace_factory(
        circles=[Circle(Point(2.0, 2.0), 1.0)],
        rectangles=[Rectangle(Point(7.0, 7.0), width=2.0, height=1.0)],
    )

    assert ws.collides_with_point(2.0, 2.0)
    assert ws.collides_with_point(3.05, 2.0)
    assert ws.collides_with_point(7.9, 7.4)
    assert not ws.collides_with_point(5.0, 5.0)
    assert not ws.collides_with_point(7.0, 7.7)


def test_empty_workspace_is_free_everywhere(empty_workspace):
    assert not empty_workspace.collides_with_point(0.0, 0.0)
    assert not empty_workspace.collides_with_point(5.0, 5.0)
    assert empty_workspace.obstacles == []


def test_upsert_replaces_route_of_same_owner(empty_workspace):
    ws = empty_workspace
    ws.upsert_route(_route("a", [(0, 0), (1, 1)]))
    ws.upsert_route(_route("b", [(0, 1), (1, 2)]))
    replacement = _route("a", [(5, 5), (6, 7)])
    ws.upsert_route(replacement)

    assert [r.owner_id for r in ws.routes] == ["a", "b"]
    assert ws.get_route("a") is replacement
    assert ws.get_route("missing") is None


def test_clear_and_remove_routes(empty_workspace):
    ws = empty_workspace
    ws.upsert_route(_route("a", [(0, 0), (1, 1)]))
    ws.upsert_route(_route("b", [(0, 1), (1, 2)]))

    assert ws.remove_route("a")
    assert not ws.remove_route("a")
    assert [r.owner_id for r in ws.routes] == ["b"]

    ws.clear_routes()
    assert ws.routes == ()


def test_collides_with_any_route(empty_workspace):
    ws = empty_workspace
    assert not ws.collides_with_any_route(0.0, 0.0, 4.0, 4.0)

    ws.upsert_route(_route("a", [(0.0, 4.0), (4.0, 0.0)]))
    assert ws.collides_with_any_route(0.0, 0.0, 4.0, 4.0)
    assert not ws.collides_with_any_route(3.0, 3.0, 5.0, 6.0)


def test_routes_view_is_read_only_copy(empty_workspace):
    empty_workspace.upsert_route(_route("a", [(0, 0), (1, 1)]))
    view = empty_workspace.routes
    empty_workspace.clear_routes()

    assert len(view) == 1
    assert empty_workspace.routes == ()


def test_snapshot_has_independent_route_registry(workspace_factory):
    ws = workspace_factory(circles=[Circle(Point(5.0, 5.0), 1.0)])
    ws.upsert_route(_route("a", [(0, 0), (1, 1)]))

    copy = ws.snapshot()
    copy.upsert_route(_route("b", [(2, 2), (3, 1)]))
    copy.clear_routes()

    assert [r.owner_id for r in ws.routes] == ["a"]
    assert copy.routes == ()
    assert copy.collides_with_point(5.0, 5.0)
    assert copy.start == ws.start and copy.goal == ws.goal
