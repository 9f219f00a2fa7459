import dataclasses
import json

import pytest

from prm_planner.models import Point
from prm_planner.route import Route, routes_collide


def _route(coords, owner_id=None):
    return Route(points=[Point(x, y) for x, y in coords], owner_id=owner_id)


def test_json_round_trip_keeps_point_order():
    route = _route([(0.0, 0.0), (1.25, 3.5), (-2.0, 7.125), (10.0, 10.0)], owner_id="robot-1")

    decoded = Route.from_json(route.to_json())

    assert decoded.points == route.points
    assert decoded.owner_id is None


def test_json_encoding_carries_points_only():
    route = _route([(1.0, 2.0), (3.0, 4.0)], owner_id="robot-1")

    assert json.loads(route.to_json()) == [{"x": 1.0, "y": 2.0}, {"x": 3.0, "y": 4.0}]
    assert Route.from_json(route.to_json(), owner_id="robot-1").owner_id == "robot-1"


def test_dict_round_trip_keeps_owner():
    route = _route([(1.0, 2.0), (3.0, 4.0)], owner_id="robot-7")

    data = route.to_dict()
    assert data["ownerId"] == "robot-7"
    assert Route.from_dict(data) == route


def test_empty_route_encodes_to_empty_list():
    assert Route().to_json() == "[]"
    assert Route.from_json("[]").points == []


def test_segment_intersects_route():
    route = _route([(0.0, 4.0), (2.0, 2.0), (4.0, 0.0)])

    assert route.segment_intersects(0.0, 0.0, 4.0, 4.0)
    assert not route.segment_intersects(0.0, 0.0, 1.0, 1.0)


def test_single_point_route_never_intersects():
    route = _route([(2.0, 2.0)])

    assert not route.segment_intersects(0.0, 0.0, 4.0, 4.0)


def test_crossing_routes_collide():
    a = _route([(0.0, 0.0), (3.0, 1.0), (6.0, 6.0)])
    b = _route([(0.0, 6.0), (3.0, 4.0), (6.0, 0.0)])

    assert routes_collide(a, b)
    assert routes_collide(b, a)


def test_parallel_routes_do_not_collide():
    a = _route([(0.0, 0.0), (4.0, 1.0), (8.0, 0.0)])
    b = _route([(0.0, 2.0), (4.0, 3.0), (8.0, 2.0)])

    assert not routes_collide(a, b)
    assert not routes_collide(b, a)


def test_routes_sharing_an_endpoint_do_not_collide():
    a = _route([(0.0, 0.0), (2.0, 2.0)])
    b = _route([(2.0, 2.0), (3.0, 0.0)])

    assert not routes_collide(a, b)


def test_length_and_sequence_protocol():
    route = _route([(0.0, 0.0), (3.0, 4.0), (6.0, 8.0)])

    assert len(route) == 3
    assert list(route) == route.points
    assert route.length() == pytest.approx(10.0)


def test_owner_is_attached_on_a_copy():
    planned = _route([(0, 0), (1, 1)])

    with pytest.raises(dataclasses.FrozenInstanceError):
        planned.owner_id = "robot-1"

    published = dataclasses.replace(planned, owner_id="robot-1")
    assert planned.owner_id is None
    assert published.owner_id == "robot-1"
    assert published.points == planned.points
