"""PostgreSQL access for the movie catalog."""

from __future__ import annotations

import logging
from typing import Protocol

import psycopg2

from ..config import DatabaseConfig

logger = logging.getLogger(__name__)

MovieRow = tuple[int, str, str, str]

CATALOG_QUERY = "SELECT id, title, genre, poster_link FROM movies ORDER BY id;"


class StoreError(RuntimeError):
    """Raised when the catalog cannot be read from the backing store."""


class CatalogStore(Protocol):
    def fetch_movie_rows(self) -> list[MovieRow]: ...


class PostgresMovieStore:
    """Reads ``(id, title, genre, poster_link)`` rows from the ``movies`` table."""

    def __init__(self, config: DatabaseConfig):
        self.config = config

    def fetch_movie_rows(self) -> list[MovieRow]:
        """Run the catalog query on a fresh connection and return every row.

        Raises:
            StoreError: if connecting or querying fails.
        """
        try:
            conn = psycopg2.connect(**self.config.connect_kwargs())
        except psycopg2.Error as exc:
            raise StoreError(
                f"Could not connect to {self.config.host}:{self.config.port}"
                f"/{self.config.database}: {exc}"
            ) from exc

        try:
            with conn.cursor() as cursor:
                cursor.execute(CATALOG_QUERY)
                rows = cursor.fetchall()
        except psycopg2.Error as exc:
            raise StoreError(f"Catalog query failed: {exc}") from exc
        finally:
            conn.close()

        logger.debug("Fetched %d catalog rows", len(rows))
        return [tuple(row) for row in rows]
