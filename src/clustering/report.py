"""Plain-text rendering of cluster summaries."""

from __future__ import annotations

from typing import Sequence

from .summary import ClusterSummary


def format_results(summaries: Sequence[ClusterSummary]) -> str:
    lines = [
        "Resulting clusters:",
        "  Score  Dominant language (%percent)  Questions",
        "================================================",
    ]
    for summary in summaries:
        lines.append(
            f"{summary.median_score:7d}  {summary.language:<17s} ({float(summary.percent):<5.1f}%)      {summary.size:7d}"
        )
    return "\n".join(lines)


__all__ = ["format_results"]
