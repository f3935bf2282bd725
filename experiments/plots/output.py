"""Destinations for persisted run artefacts (CSV tables and Plotly figures)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PlotOutput:
    """Folder layout for one run: `<base_dir>/<run_tag>/<slug>.{csv,png,html}`."""

    base_dir: Path
    run_tag: str
    slug: str = "clusters"
    save_static: bool = True
    save_html: bool = True

    @property
    def directory(self) -> Path:
        return self.base_dir / self.run_tag

    def ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    @property
    def csv_path(self) -> Path:
        return self.directory / f"{self.slug}.csv"

    @property
    def png_path(self) -> Path:
        return self.directory / f"{self.slug}_medians.png"

    @property
    def html_path(self) -> Path:
        return self.directory / f"{self.slug}_medians.html"


__all__ = ["PlotOutput"]
