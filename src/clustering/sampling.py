"""Initial centroid selection."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from src.bulk import LocalCollection
from src.postings import HighScore, LangIndex, Vector

from .config import KMeansConfig


def reservoir_sampling(lang: LangIndex, items: Iterable[HighScore], size: int) -> List[HighScore]:
    """Draw `size` scores from a stream in a single pass.

    The generator is seeded with the language index so reruns pick the same
    reservoir. After the reservoir is filled, the element seen when `i`
    elements have already been consumed replaces slot `j`, with `j` drawn
    uniformly from `[0, i)`, whenever `j < size`.

    See http://en.wikipedia.org/wiki/Reservoir_sampling
    """
    if size < 0:
        raise ValueError("Reservoir size cannot be negative.")
    iterator = iter(items)
    rng = np.random.default_rng(lang)

    reservoir: List[HighScore] = []
    for _ in range(size):
        try:
            reservoir.append(next(iterator))
        except StopIteration:
            raise ValueError(
                f"Language {lang} has only {len(reservoir)} vectors, at least {size} are required."
            ) from None

    seen = size
    for item in iterator:
        j = int(rng.integers(0, seen))
        if j < size:
            reservoir[j] = item
        seen += 1
    return reservoir


def sample_vectors(vectors: LocalCollection[Vector], config: KMeansConfig, debug: bool = False) -> List[Vector]:
    """Pick `config.kernels` seed centroids.

    With a large `lang_spread` the seeds are stratified: each language
    contributes `config.per_language` vectors chosen by reservoir sampling.
    Otherwise the seeds are a global sample without replacement.
    """
    config.validate()

    if config.stratified:
        per_lang = config.per_language
        grouped = vectors.group_by_key().collect()
        samples = [
            (lang, score)
            for lang, scores in sorted(grouped, key=lambda item: item[0])
            for score in reservoir_sampling(lang, scores, per_lang)
        ]
    else:
        samples = vectors.take_sample(config.kernels, seed=config.sample_seed)

    if len(samples) != config.kernels:
        raise ValueError(f"Sampled {len(samples)} initial centroids, expected {config.kernels}.")

    if debug:
        mode = "stratified" if config.stratified else "global"
        print(f"[sample] Drew {len(samples)} {mode} seeds from {vectors.count()} vectors")
    return samples


__all__ = ["reservoir_sampling", "sample_vectors"]
