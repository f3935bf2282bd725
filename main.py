from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from experiments.plots import PlotOutput
from experiments.stackoverflow import run_stackoverflow_clusters
from src.clustering import DEFAULT_LANGUAGES, KMeansConfig
from src.clustering.config import DEFAULT_INPUT_PATH

app = typer.Typer()


@app.command()
def cluster(
    input_path: Path = typer.Option(
        DEFAULT_INPUT_PATH,
        "--input",
        exists=False,
        file_okay=True,
        dir_okay=False,
        help="CSV dump of postings (postTypeId,id,acceptedAnswer,parentId,score,tag).",
    ),
    partitions: int = typer.Option(8, "--partitions", help="Number of partitions for the posting collection."),
    lang_spread: int = typer.Option(50000, "--lang-spread", help="Distance placed between consecutive languages."),
    kernels: int = typer.Option(45, "--kernels", help="Number of centroids (multiple of the language count)."),
    eta: float = typer.Option(20.0, "--eta", help="Convergence threshold on total centroid movement."),
    max_iterations: int = typer.Option(120, "--max-iterations", help="Maximum k-means iterations."),
    dominant_language: str = typer.Option(
        "highest-index",
        "--dominant-language",
        help="Dominant language rule: highest-index (reference output) or most-frequent.",
        show_default=True,
    ),
    expect_vectors: Optional[int] = typer.Option(
        None,
        "--expect-vectors",
        help="Fail unless the dump yields exactly this many vectors (e.g. 2121822 for the reference dump).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Print per-iteration k-means diagnostics."),
    results_root: Optional[Path] = typer.Option(
        None,
        "--results-root",
        help="Directory where the cluster table and plots should be saved (subfolders are created automatically).",
    ),
    results_tag: Optional[str] = typer.Option(
        None,
        "--results-tag",
        help="Folder suffix for this run (defaults to timestamp).",
    ),
    save_static: bool = typer.Option(True, help="Write a static PNG snapshot when saving plots."),
    save_html: bool = typer.Option(True, help="Write an interactive HTML plot when saving."),
) -> None:
    """
    Cluster StackOverflow questions by language and best answer score.
    """
    config = KMeansConfig(
        languages=DEFAULT_LANGUAGES,
        lang_spread=lang_spread,
        kernels=kernels,
        eta=eta,
        max_iterations=max_iterations,
        dominant_language=dominant_language,  # type: ignore[arg-type]
    )
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if partitions < 1:
        raise typer.BadParameter("--partitions must be at least 1.")

    output: Optional[PlotOutput] = None
    if results_root:
        tag = results_tag or datetime.utcnow().strftime("%Y%m%d-%H%M%S")
        output = PlotOutput(base_dir=results_root / "stackoverflow", run_tag=tag, save_static=save_static, save_html=save_html)
        print(f"[results] Saving results under {output.directory}")

    run_stackoverflow_clusters(
        input_path,
        config,
        num_partitions=partitions,
        debug=debug,
        expected_vectors=expect_vectors,
        output=output,
    )


@app.command()
def languages() -> None:
    """List the languages studied, in vector-axis order."""
    for idx, language in enumerate(DEFAULT_LANGUAGES):
        print(f"{idx:2d}  {language}")


if __name__ == "__main__":
    app()
