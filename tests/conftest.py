import matplotlib

matplotlib.use("Agg")

import pytest

from prm_planner.models import Bounds, Point
from prm_planner.workspace import Workspace


def make_workspace(circles=(), rectangles=(), start=(0.0, 0.0), goal=(10.0, 10.0)):
    return Workspace(
        bounds=Bounds(0.0, 10.0, 0.0, 10.0),
        start=Point(*start),
        goal=Point(*goal),
        circles=list(circles),
        rectangles=list(rectangles),
    )


@pytest.fixture
def empty_workspace():
    return make_workspace()


@pytest.fixture
def snapshot():
    return {
        "start": {"x": 0.5, "y": 0.5},
        "goal": {"x": 9.5, "y": 9.5},
        "bounds": {"xMin": 0, "xMax": 10, "yMin": 0, "yMax": 10},
        "circles": [{"xCenter": 5.0, "yCenter": 5.0, "radius": 1.5}],
        "rectangles": [{"xCenter": 2.0, "yCenter": 7.0, "width": 1.0, "height": 2.0}],
    }


@pytest.fixture
def workspace_factory():
    return make_workspace
