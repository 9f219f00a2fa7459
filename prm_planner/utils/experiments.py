"""Experiment utilities for running and collecting PRM results."""

import csv
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

from ..loader import load_routes, load_workspace
from ..visualization import plot_workspace
from ..algorithms.prm import PRMParams, PRMPlanner

logger = logging.getLogger(__name__)


@dataclass
class ExperimentResult:
    scenario_name: str
    n_obstacles: int
    n_peer_routes: int
    n_nodes: int
    n_edges: int
    found: bool
    path_length: float
    n_waypoints: int
    attempts_used: int
    cpu_time: float


def run_experiment(
    workspace_path: Path,
    params: Optional[PRMParams] = None,
    routes_path: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
) -> ExperimentResult:
    params = params if params is not None else PRMParams()

    if verbose:
        print(f"\nProcessing {workspace_path.name}...")

    # Load workspace (and peer routes, if any)
    workspace = load_workspace(workspace_path)
    if routes_path is not None:
        for route in load_routes(routes_path):
            workspace.upsert_route(route)

    if verbose:
        b = workspace.bounds
        print(f"  Workspace: [{b.x_min}, {b.x_max}] x [{b.y_min}, {b.y_max}]")
        print(f"  Obstacles: {len(workspace.obstacles)}")
        print(f"  Peer routes: {len(workspace.routes)}")
        print(f"  Running PRM with {params.node_count} nodes, k={params.k}, step={params.step}...")

    planner = PRMPlanner(params)
    result = planner.plan(workspace)

    if verbose:
        print(f"  Route found: {result.found}")
        print(f"  Roadmap: {result.n_nodes} nodes, {result.n_edges} edges")
        print(f"  Attempts: {result.attempts_used}")
        print(f"  CPU Time: {result.cpu_time:.3f}s")
        if result.found:
            print(f"  Route Length: {result.cost:.2f} ({len(result.route)} points)")
        else:
            print(f"  Failure: {result.failure_reason}")

    # Save plot
    if save_plots and output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)
        plot_file = output_dir / f"{workspace_path.stem}_prm_route.png"
        fig, _ = plot_workspace(
            workspace,
            route=result.route,
            roadmap_edges=planner.roadmap_edges(),
            save_to=plot_file,
            show=False,
        )
        plt.close(fig)
        if verbose:
            print(f"  Saved: {plot_file.name}")

    return ExperimentResult(
        scenario_name=workspace_path.name,
        n_obstacles=len(workspace.obstacles),
        n_peer_routes=len(workspace.routes),
        n_nodes=result.n_nodes,
        n_edges=result.n_edges,
        found=result.found,
        path_length=result.cost,
        n_waypoints=len(result.route) if result.found else 0,
        attempts_used=result.attempts_used,
        cpu_time=result.cpu_time,
    )


def run_all_experiments(
    scenarios_dir: Path,
    params: Optional[PRMParams] = None,
    output_dir: Optional[Path] = None,
    save_plots: bool = True,
    verbose: bool = True,
) -> List[ExperimentResult]:
    """Run the PRM planner on every `*.json` workspace in a directory.

    Files named `*.routes.json` are peer-route sets: `foo.routes.json` is
    loaded together with `foo.json`.

    Args:
        scenarios_dir: Directory containing workspace files.
        params: PRM parameters. If None, uses defaults.
        output_dir: Directory to save output files.
        save_plots: Whether to save plots.
        verbose: Whether to print progress.

    Returns:
        List of ExperimentResult for all workspaces.
    """
    workspace_files = sorted(
        f for f in scenarios_dir.glob("*.json") if not f.name.endswith(".routes.json")
    )

    if verbose:
        print(f"Found {len(workspace_files)} workspaces: {[f.stem for f in workspace_files]}")

    results = []
    shortest: Optional[ExperimentResult] = None

    for workspace_file in workspace_files:
        routes_file = workspace_file.with_name(f"{workspace_file.stem}.routes.json")
        result = run_experiment(
            workspace_file,
            params,
            routes_path=routes_file if routes_file.exists() else None,
            output_dir=output_dir,
            save_plots=save_plots,
            verbose=verbose,
        )
        results.append(result)

        if result.found:
            if shortest is None or result.path_length < shortest.path_length:
                shortest = result

    logger.info("Completed %d experiments, %d with a route",
                len(results), sum(1 for r in results if r.found))
    if verbose:
        print(f"\n{'='*60}")
        print(f"Completed {len(results)} experiments.")
        if shortest:
            print(f"SHORTEST ROUTE:")
            print(f"  Workspace: {shortest.scenario_name}")
            print(f"  Length:    {shortest.path_length:.4f}")
        else:
            print("NO ROUTE found in any experiment.")

    return results


def save_results_csv(
    results: List[ExperimentResult],
    output_path: Path,
) -> None:
    """Save experiment results to CSV file."""
    if not results:
        return

    fieldnames = [
        "scenario_name", "n_obstacles", "n_peer_routes", "n_nodes", "n_edges",
        "found", "path_length", "n_waypoints", "attempts_used", "cpu_time",
    ]

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            writer.writerow(asdict(r))


def print_results_summary(
    results: List[ExperimentResult],
    params: Optional[PRMParams] = None,
) -> None:
    """Print formatted summary table of results."""
    print("\n" + "=" * 100)
    print("PRM EXPERIMENT RESULTS SUMMARY")
    print("=" * 100)

    if params:
        print(f"\nParameters: nodes={params.node_count}, k={params.k}, step={params.step}, "
              f"max_attempts={params.max_attempts}, seed={params.seed}")
    print()

    # Table header
    header = (f"{'Workspace':<22} {'Obs':>4} {'Peers':>5} {'Nodes':>6} {'Edges':>6} "
              f"{'Length':>9} {'Pts':>4} {'Att':>4} {'CPU(s)':>7} {'Found':>5}")
    print(header)
    print("-" * len(header))

    for r in results:
        print(f"{r.scenario_name:<22} {r.n_obstacles:>4} {r.n_peer_routes:>5} {r.n_nodes:>6} "
              f"{r.n_edges:>6} {r.path_length:>9.2f} {r.n_waypoints:>4} {r.attempts_used:>4} "
              f"{r.cpu_time:>7.3f} {'Yes' if r.found else 'No':>5}")

    print("-" * len(header))
    print(f"\nTotal workspaces: {len(results)}")
    print(f"Routes found: {sum(1 for r in results if r.found)}/{len(results)}")
    if results:
        print(f"Avg CPU time: {sum(r.cpu_time for r in results)/len(results):.3f}s")
