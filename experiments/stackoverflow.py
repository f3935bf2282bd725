from __future__ import annotations

from pathlib import Path
from typing import Optional

from src.clustering import ClusterRun, KMeansConfig, format_results, run_pipeline, summaries_to_frame
from src.postings import load_postings

from experiments.plots import PlotOutput, plot_cluster_medians


def run_stackoverflow_clusters(
    input_path: Path,
    config: KMeansConfig,
    num_partitions: int = 8,
    debug: bool = False,
    expected_vectors: Optional[int] = None,
    output: Optional[PlotOutput] = None,
) -> ClusterRun:
    """Cluster the posting dump at `input_path`, print the table and optionally persist results."""
    postings = load_postings(input_path, num_partitions=num_partitions)
    run = run_pipeline(postings, config, debug=debug, expected_vectors=expected_vectors)

    status = "converged" if run.kmeans.converged else "stopped at the iteration cap"
    print(f"[kmeans] {status} after {run.kmeans.iterations} iterations (distance={run.kmeans.distance:.1f})")
    print(format_results(run.summaries))

    if output:
        output.ensure_dir()
        frame = summaries_to_frame(run.summaries)
        frame.to_csv(output.csv_path, index=False)
        print(f"[results] Wrote {len(frame)} clusters to {output.csv_path}")
        plot_cluster_medians(run.summaries, save_to=output)
    return run
