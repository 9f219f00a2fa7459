import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path

from prm_planner.loader import load_routes, load_workspace
from prm_planner.algorithms.prm import PRMParams, PRMPlanner
from prm_planner.visualization import plot_workspace


def main():
    parser = argparse.ArgumentParser(description="Run PRM Path Planning")
    parser.add_argument("workspace", type=str, help="Path to workspace JSON file")
    parser.add_argument("--routes", type=str, default=None, help="Path to peer routes JSON file")
    parser.add_argument("--nodes", type=int, default=1000, help="Number of roadmap nodes")
    parser.add_argument("--k", type=int, default=40, help="Connections per node")
    parser.add_argument("--step", type=float, default=0.1, help="Collision sampling step")
    parser.add_argument("--attempts", type=int, default=10, help="Start/goal anchor attempts")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--owner", type=str, default=None, help="Owner id to attach to the route")
    parser.add_argument("--json", action="store_true", help="Print the route as JSON")
    parser.add_argument("--out", type=str, default="prm_result.png", help="Output filename for plot")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Load workspace
    workspace_path = Path(args.workspace)
    if not workspace_path.exists():
        print(f"Error: Workspace file {workspace_path} not found.")
        return

    print(f"Loading workspace from {workspace_path}...")
    workspace = load_workspace(workspace_path)
    if args.routes:
        for route in load_routes(args.routes):
            workspace.upsert_route(route)
        print(f"Loaded {len(workspace.routes)} peer routes")

    # Configure PRM
    params = PRMParams(
        node_count=args.nodes,
        k=args.k,
        step=args.step,
        max_attempts=args.attempts,
        seed=args.seed,
    )

    print(f"Running PRM (Output: {args.out})...")
    planner = PRMPlanner(params)
    result = planner.plan(workspace)

    print(f"Planning complete in {result.cpu_time:.4f}s")
    print(f"Roadmap: {result.n_nodes} nodes, {result.n_edges} edges")

    if result.route is not None:
        route = replace(result.route, owner_id=args.owner)
        print(f"Route found! Length: {result.cost:.4f}")
        print(f"Route points: {len(result.route)}")
        print(f"Attempts used: {result.attempts_used}")
        if args.json:
            print(json.dumps(route.to_dict()))
    else:
        print(f"No route found ({result.failure_reason}).")

    print("Plotting results...")
    plot_workspace(
        workspace,
        route=result.route,
        roadmap_edges=planner.roadmap_edges(),
        save_to=args.out,
        show=False,
    )
    print(f"Result saved to {args.out}")


if __name__ == "__main__":
    main()
