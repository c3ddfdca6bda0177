"""Similarity scoring between mean-color vectors."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from ..features.color import MeanColor
from ..io.models import Movie, RankedResult

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 5

# Distance assigned when either vector has zero norm; such entries never rank.
DEGENERATE_DISTANCE: float = math.inf


def cosine_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Return ``1 - cos(a, b)`` in ``[0, 2]``, or :data:`DEGENERATE_DISTANCE`."""
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return DEGENERATE_DISTANCE

    similarity = float(np.dot(vec_a, vec_b)) / (norm_a * norm_b)
    return float(max(0.0, min(2.0, 1.0 - similarity)))


def is_degenerate(distance: float) -> bool:
    return math.isinf(distance) or math.isnan(distance)


def recommend(
    query: MeanColor,
    catalog: Sequence[Movie],
    top_n: int = DEFAULT_TOP_N,
) -> list[RankedResult]:
    """Return up to *top_n* catalog movies closest to *query*, nearest first.

    Movies without a cover, or whose cover has a zero mean-color vector, are
    left out. Equal distances keep their catalog order.
    """
    if top_n <= 0 or not catalog:
        return []
    if is_degenerate(cosine_distance(query, query)):
        logger.debug("Query color %s is degenerate; nothing to rank", query)
        return []

    scored: list[RankedResult] = []
    skipped = 0
    for movie in catalog:
        if not movie.has_cover:
            skipped += 1
            continue
        distance = cosine_distance(query, movie.mean_color)
        if is_degenerate(distance):
            skipped += 1
            continue
        scored.append(RankedResult(distance=distance, movie=movie))

    if skipped:
        logger.debug("Excluded %d of %d movies without a usable cover", skipped, len(catalog))

    # sorted() is stable, so ties stay in catalog order.
    ranked = sorted(scored, key=lambda item: item.distance)
    return ranked[:top_n]
