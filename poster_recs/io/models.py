"""Data models shared across the poster recommendation pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from ..features.color import MeanColor, mean_rgb

QUERY_MOVIE_ID = 0


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Outcome of a single poster download and decode."""

    url: str
    image: Image.Image | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None

    @classmethod
    def success(cls, url: str, image: Image.Image) -> FetchResult:
        return cls(url=url, image=image)

    @classmethod
    def failure(cls, url: str, reason: str) -> FetchResult:
        return cls(url=url, reason=reason)


@dataclass(slots=True, frozen=True)
class Movie:
    """A recommendable catalog row together with its normalized cover."""

    id: int
    title: str
    genre: str
    poster_url: str
    cover: Image.Image | None = None

    @property
    def has_cover(self) -> bool:
        return self.cover is not None

    @property
    def mean_color(self) -> MeanColor:
        """Mean (R, G, B) of the cover, recomputed on every access."""
        return mean_rgb(self.cover)


@dataclass(slots=True, frozen=True)
class RankedResult:
    """A catalog movie paired with its distance to the query poster."""

    distance: float
    movie: Movie
