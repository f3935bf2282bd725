"""Bar chart of median answer score per cluster."""

from __future__ import annotations

from typing import Optional, Sequence

import plotly.express as px

from src.clustering import ClusterSummary, summaries_to_frame
from .output import PlotOutput


def plot_cluster_medians(
    summaries: Sequence[ClusterSummary],
    save_to: Optional[PlotOutput] = None,
) -> None:
    """Visualize each cluster's median score, coloured by dominant language."""
    if not summaries:
        return

    df = summaries_to_frame(summaries)
    df["cluster"] = [f"#{idx} {language}" for idx, language in enumerate(df["language"])]

    fig = px.bar(
        df,
        x="median_score",
        y="cluster",
        color="language",
        orientation="h",
        hover_data={"percent": True, "size": True, "cluster": False},
        title="Median best-answer score per cluster",
        labels={"median_score": "Median score", "cluster": "Cluster (dominant language)"},
    )
    fig.update_layout(yaxis=dict(categoryorder="array", categoryarray=list(df["cluster"])))

    if save_to:
        save_to.ensure_dir()
        if save_to.save_static:
            fig.write_image(str(save_to.png_path), engine="kaleido")
        if save_to.save_html:
            fig.write_html(
                str(save_to.html_path),
                include_plotlyjs="cdn",
                full_html=True,
            )
    else:
        fig.show()
