"""Output helpers for presenting recommendation results."""

from __future__ import annotations

from typing import Sequence, TextIO

from .models import RankedResult

NO_RESULTS_MESSAGE = "No recommendations available."


def format_result(result: RankedResult, show_distance: bool = False) -> str:
    """Return the one-line listing for *result*."""
    movie = result.movie
    line = f"Title: {movie.title}, Genre: {movie.genre}, Poster: {movie.poster_url}"
    if show_distance:
        line += f", Distance: {result.distance:.6f}"
    return line


def write_recommendations(
    stream: TextIO, results: Sequence[RankedResult], show_distance: bool = False
) -> int:
    """Write the ranked listing to *stream* and return the number of lines."""
    if not results:
        stream.write(NO_RESULTS_MESSAGE + "\n")
        return 0
    stream.write("Recommended movies:\n")
    for result in results:
        stream.write(format_result(result, show_distance) + "\n")
    return len(results)
