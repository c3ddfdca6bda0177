"""Build the in-memory movie catalog with concurrently fetched covers."""

from __future__ import annotations

import logging
from typing import Callable

from ..config import FetchConfig
from ..crawl.fetch import fetch_image
from ..extract.normalize import normalize_cover
from ..io.models import FetchResult, Movie
from .store import CatalogStore, MovieRow, StoreError
from .tasks import FetchGroup

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], FetchResult]
MovieFields = tuple[int, str, str, str]


class MalformedRowError(ValueError):
    """Raised when a catalog row cannot be coerced to movie fields."""


def load_catalog(
    store: CatalogStore,
    config: FetchConfig,
    fetcher: Fetcher = fetch_image,
) -> list[Movie]:
    """Return every catalog movie in row order with its normalized cover.

    One poster fetch is started per row while the row is read; all of them
    are awaited before covers are normalized and attached. A store failure
    or a malformed row yields an empty catalog, never a partial one. A fetch
    that raises only costs that movie its cover.
    """
    try:
        rows = store.fetch_movie_rows()
    except StoreError as exc:
        logger.error("Could not load catalog: %s", exc)
        return []

    pending: list[MovieFields] = []

    def crashed(slot: int, exc: Exception) -> FetchResult:
        url = pending[slot][3]
        logger.error("Poster fetch crashed for %s: %s", url, exc, exc_info=exc)
        return FetchResult.failure(url, f"unexpected: {exc}")

    try:
        with FetchGroup(
            config.max_workers, show_progress=config.show_progress
        ) as group:
            for row in rows:
                fields = _row_fields(row)
                group.submit(fetcher, fields[3], config.timeout)
                pending.append(fields)
            results = group.join(on_error=crashed)
    except MalformedRowError as exc:
        logger.error("Malformed catalog row, discarding catalog: %s", exc)
        return []

    movies = [
        Movie(
            id=movie_id,
            title=title,
            genre=genre,
            poster_url=poster_url,
            cover=normalize_cover(result.image),
        )
        for (movie_id, title, genre, poster_url), result in zip(pending, results)
    ]
    failed = sum(1 for movie in movies if not movie.has_cover)
    logger.info("Loaded %d movies (%d covers unavailable)", len(movies), failed)
    return movies


def _row_fields(row: MovieRow) -> MovieFields:
    try:
        movie_id, title, genre, poster_url = row
        movie_id = int(movie_id)
    except (TypeError, ValueError) as exc:
        raise MalformedRowError(f"{row!r}: {exc}") from exc
    if poster_url is None:
        poster_url = ""
    return movie_id, str(title), str(genre), str(poster_url)
