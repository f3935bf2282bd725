"""Plotting utilities for clustering runs."""

from .cluster_medians import plot_cluster_medians
from .output import PlotOutput

__all__ = ["PlotOutput", "plot_cluster_medians"]
