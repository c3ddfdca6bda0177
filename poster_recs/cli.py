"""Command-line interface for the poster_recs project."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from dotenv import load_dotenv

from .catalog.loader import load_catalog
from .catalog.store import PostgresMovieStore
from .config import ConfigError, DatabaseConfig, FetchConfig
from .crawl.fetch import DEFAULT_TIMEOUT, fetch_image
from .extract.normalize import normalize_cover
from .io.models import QUERY_MOVIE_ID, Movie
from .io.outputs import write_recommendations
from .rank.similarity import DEFAULT_TOP_N, recommend

EXIT_OK = 0
EXIT_QUERY_POSTER_FAILED = 1
EXIT_BAD_INPUT = 2

logger = logging.getLogger(__name__)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the poster recommender."""
    parser = argparse.ArgumentParser(
        description="Recommend catalog movies whose posters share a color mood with yours."
    )
    parser.add_argument("--title", default=None, help="Title of your movie (prompted if omitted).")
    parser.add_argument(
        "--poster-url", default=None, help="URL of your movie's poster (prompted if omitted)."
    )
    parser.add_argument(
        "--top-n",
        type=int,
        default=DEFAULT_TOP_N,
        help="Number of recommendations to print.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request poster download timeout in seconds.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=FetchConfig.max_workers,
        help="Maximum number of simultaneous poster downloads.",
    )

    db = parser.add_argument_group("database", "Overrides for POSTGRES_* environment variables.")
    db.add_argument("--db-host", default=None)
    db.add_argument("--db-port", type=int, default=None)
    db.add_argument("--db-user", default=None)
    db.add_argument("--db-password", default=None)
    db.add_argument("--db-name", default=None)

    parser.add_argument(
        "--show-distances",
        action="store_true",
        help="Append the cosine distance to each recommendation.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the poster download progress bar.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(list(argv) if argv is not None else None)


def _build_configs(args: argparse.Namespace) -> tuple[DatabaseConfig, FetchConfig]:
    db_config = DatabaseConfig.from_env(
        host=args.db_host,
        port=args.db_port,
        user=args.db_user,
        password=args.db_password,
        database=args.db_name,
    )
    fetch_config = FetchConfig(
        timeout=args.timeout,
        max_workers=args.workers,
        show_progress=not args.no_progress,
    )
    return db_config, fetch_config


def _prompt(value: str | None, message: str) -> str:
    if value is not None:
        return value.strip()
    return input(message).strip()


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        db_config, fetch_config = _build_configs(args)
    except ConfigError as exc:
        print(f"[error] invalid configuration: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    catalog = load_catalog(PostgresMovieStore(db_config), fetch_config, fetcher=fetch_image)
    if not catalog:
        print("[catalog] no movies loaded", file=sys.stderr)
    else:
        print(f"[catalog] {len(catalog)} movies loaded")

    try:
        title = _prompt(args.title, "Enter movie title: ")
        poster_url = _prompt(args.poster_url, "Enter poster URL: ")
    except EOFError:
        print("[error] no input provided", file=sys.stderr)
        return EXIT_BAD_INPUT

    result = fetch_image(poster_url, fetch_config.timeout)
    cover = normalize_cover(result.image)
    if cover is None:
        print(
            f"[error] could not load your poster from {poster_url or '(empty)'}: {result.reason}",
            file=sys.stderr,
        )
        return EXIT_QUERY_POSTER_FAILED

    query = Movie(
        id=QUERY_MOVIE_ID,
        title=title,
        genre="N/A",
        poster_url=poster_url,
        cover=cover,
    )
    query_color = query.mean_color
    logger.debug("Query %r mean color %s", query.title, query_color)
    recommendations = recommend(query_color, catalog, args.top_n)
    write_recommendations(sys.stdout, recommendations, show_distance=args.show_distances)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
