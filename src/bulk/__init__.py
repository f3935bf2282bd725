"""Partitioned bulk collections backing the clustering pipeline."""

from .base import BulkCollection
from .local import LocalCollection

__all__ = ["BulkCollection", "LocalCollection"]
