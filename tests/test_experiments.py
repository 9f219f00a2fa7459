import csv
import json
import math

import matplotlib.pyplot as plt

from prm_planner.algorithms.prm import PRMParams
from prm_planner.models import Point, Rectangle
from prm_planner.route import Route
from prm_planner.utils.experiments import (
    print_results_summary,
    run_all_experiments,
    run_experiment,
    save_results_csv,
)
from prm_planner.visualization import plot_workspace


OPEN_FIELD = {
    "start": {"x": 0.0, "y": 0.0},
    "goal": {"x": 10.0, "y": 10.0},
    "bounds": {"xMin": 0, "xMax": 10, "yMin": 0, "yMax": 10},
    "circles": [],
    "rectangles": [],
}

WALLED = {
    "start": {"x": 1.0, "y": 1.0},
    "goal": {"x": 9.0, "y": 9.0},
    "bounds": {"xMin": 0, "xMax": 10, "yMin": 0, "yMax": 10},
    "circles": [],
    "rectangles": [{"xCenter": 5.0, "yCenter": 5.0, "width": 1.0, "height": 10.0}],
}

PARAMS = PRMParams(node_count=50, k=5, step=0.1, max_attempts=10, seed=1)


def test_plot_workspace_draws_everything(tmp_path, workspace_factory):
    ws = workspace_factory(rectangles=[Rectangle(Point(5.0, 5.0), 2.0, 1.0, angle=math.pi / 6)])
    ws.upsert_route(Route([Point(1.0, 9.0), Point(3.0, 7.0), Point(4.0, 8.0)], owner_id="robot-2"))
    route = Route([Point(0.0, 0.0), Point(2.0, 1.0), Point(10.0, 10.0)])
    out = tmp_path / "plot.png"

    fig, ax = plot_workspace(
        ws,
        route=route,
        roadmap_edges=[(Point(1.0, 1.0), Point(2.0, 2.0))],
        save_to=out,
        show=False,
    )

    assert out.exists()
    assert len(ax.patches) == 2  # border + rectangle
    plt.close(fig)


def test_run_experiment(tmp_path):
    ws_file = tmp_path / "open_field.json"
    ws_file.write_text(json.dumps(OPEN_FIELD))

    result = run_experiment(ws_file, PARAMS, output_dir=tmp_path / "out", verbose=False)

    assert result.scenario_name == "open_field.json"
    assert result.found
    assert result.n_nodes == 50
    assert result.path_length >= math.hypot(10.0, 10.0) - 1e-9
    assert (tmp_path / "out" / "open_field_prm_route.png").exists()


def test_run_all_experiments_pairs_route_files(tmp_path, capsys):
    (tmp_path / "a_open.json").write_text(json.dumps(OPEN_FIELD))
    (tmp_path / "b_walled.json").write_text(json.dumps(WALLED))
    (tmp_path / "b_walled.routes.json").write_text(json.dumps([
        {"ownerId": "robot-2", "points": [{"x": 1.0, "y": 9.0}, {"x": 3.0, "y": 7.5}]},
    ]))

    results = run_all_experiments(tmp_path, PARAMS, save_plots=False, verbose=True)

    assert [r.scenario_name for r in results] == ["a_open.json", "b_walled.json"]
    assert results[0].found
    assert not results[1].found
    assert results[1].n_peer_routes == 1
    assert results[1].n_waypoints == 0
    assert "SHORTEST ROUTE" in capsys.readouterr().out

    csv_file = tmp_path / "results.csv"
    save_results_csv(results, csv_file)
    with open(csv_file, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [row["found"] for row in rows] == ["True", "False"]

    print_results_summary(results, PARAMS)
    assert "Routes found: 1/2" in capsys.readouterr().out
