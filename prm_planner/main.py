"""Main entry point for PathPlanning_PRM."""
import logging
from pathlib import Path

from .algorithms.prm import PRMParams
from .utils.experiments import print_results_summary, run_all_experiments, save_results_csv


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("PathPlanning_PRM - Probabilistic Roadmap Planning")
    print("=" * 40)

    # Configuration
    base_dir = Path(__file__).parent.parent
    scenarios_dir = base_dir / "scenarios"
    output_dir = base_dir / "output/results"

    params = PRMParams(node_count=500, k=20, step=0.1, max_attempts=10, seed=42)

    print(f"Running experiments from {scenarios_dir}...")
    results = run_all_experiments(
        scenarios_dir=scenarios_dir,
        params=params,
        output_dir=output_dir,
    )

    output_dir.mkdir(parents=True, exist_ok=True)
    save_results_csv(results, output_dir / "prm_results.csv")
    print_results_summary(results, params)

    print("\nAll experiments completed.")


if __name__ == "__main__":
    main()
