"""Line-oriented reader for the StackOverflow posting dump.

Each line has the structure::

    <postTypeId>,<id>,[<acceptedAnswer>],[<parentId>],<score>,[<tag>]

Optional fields are left empty; the tag is only present on questions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from tqdm import tqdm

from src.bulk import LocalCollection

from .records import Posting, PostingKind


def _optional_int(field: str) -> Optional[int]:
    return int(field) if field else None


def parse_posting(line: str) -> Posting:
    """Parse a single CSV line into a `Posting`."""
    fields = line.rstrip("\r\n").split(",")
    if len(fields) < 5:
        raise ValueError(f"Expected at least 5 fields, found {len(fields)}: {line!r}")
    try:
        kind = PostingKind(int(fields[0]))
        return Posting(
            kind=kind,
            id=int(fields[1]),
            accepted_answer_id=_optional_int(fields[2]),
            parent_id=_optional_int(fields[3]),
            score=int(fields[4]),
            tag=fields[5] if len(fields) >= 6 and fields[5] else None,
        )
    except ValueError as exc:
        raise ValueError(f"Malformed posting line {line!r}: {exc}") from exc


def read_postings(path: Path, show_progress: bool = True) -> Iterator[Posting]:
    """Yield postings from `path`, skipping blank lines."""
    with path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(tqdm(handle, desc="Reading postings", disable=not show_progress), start=1):
            if not line.strip():
                continue
            try:
                yield parse_posting(line)
            except ValueError as exc:
                raise ValueError(f"{path}:{line_no}: {exc}") from exc


def load_postings(path: Path, num_partitions: int = 8, show_progress: bool = True) -> LocalCollection[Posting]:
    """Read every posting in `path` into a partitioned collection."""
    if not path.exists():
        raise FileNotFoundError(f"Posting dump not found at {path}")
    return LocalCollection.from_iterable(read_postings(path, show_progress=show_progress), num_partitions)


__all__ = ["load_postings", "parse_posting", "read_postings"]
