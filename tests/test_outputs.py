"""
Tests for the text listing of recommendations.
"""

import io

from poster_recs.io.models import Movie, RankedResult
from poster_recs.io.outputs import NO_RESULTS_MESSAGE, format_result, write_recommendations


def ranked(distance, title):
    return RankedResult(
        distance=distance,
        movie=Movie(id=1, title=title, genre="noir", poster_url="https://p.test/a.png"),
    )


def test_format_result():
    assert format_result(ranked(0.25, "Laura")) == (
        "Title: Laura, Genre: noir, Poster: https://p.test/a.png"
    )
    assert format_result(ranked(0.25, "Laura"), show_distance=True).endswith(
        ", Distance: 0.250000"
    )


def test_write_recommendations():
    stream = io.StringIO()
    count = write_recommendations(stream, [ranked(0.1, "Laura"), ranked(0.2, "Gilda")])
    assert count == 2
    assert stream.getvalue().splitlines() == [
        "Recommended movies:",
        "Title: Laura, Genre: noir, Poster: https://p.test/a.png",
        "Title: Gilda, Genre: noir, Poster: https://p.test/a.png",
    ]


def test_write_empty():
    stream = io.StringIO()
    assert write_recommendations(stream, []) == 0
    assert stream.getvalue() == NO_RESULTS_MESSAGE + "\n"
