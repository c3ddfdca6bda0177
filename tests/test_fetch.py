"""
Tests for the poster fetcher: every failure becomes a failed FetchResult.
"""

import requests

from conftest import RED, png_bytes

from poster_recs.crawl.fetch import _qualify_poster_url, fetch_image


class TestQualifyPosterUrl:
    def test_keeps_qualified_urls(self):
        assert _qualify_poster_url("http://a.test/p.png") == "http://a.test/p.png"
        assert _qualify_poster_url("https://a.test/p.png") == "https://a.test/p.png"

    def test_adds_https_to_bare_hosts(self):
        assert _qualify_poster_url("a.test/p.png") == "https://a.test/p.png"
        assert _qualify_poster_url("//a.test/p.png") == "https://a.test/p.png"

    def test_blank_stays_blank(self):
        assert _qualify_poster_url("   ") == ""


class TestFetchImage:
    def test_success_decodes_rgb_image(self, fake_session):
        url = "https://posters.test/red.png"
        fake_session.routes[url] = (200, png_bytes(RED, size=(10, 20)))

        result = fetch_image(url, timeout=3.0)

        assert result.ok
        assert result.reason is None
        assert result.image.mode == "RGB"
        assert result.image.size == (10, 20)
        assert fake_session.calls == [(url, 3.0)]

    def test_rgba_payload_is_converted_to_rgb(self, fake_session):
        url = "https://posters.test/alpha.png"
        fake_session.routes[url] = (200, png_bytes((0, 0, 255, 128), mode="RGBA"))

        result = fetch_image(url)

        assert result.ok
        assert result.image.mode == "RGB"

    def test_http_error_status_is_failure(self, fake_session):
        url = "https://posters.test/missing.png"
        fake_session.routes[url] = (404, b"not found")

        result = fetch_image(url)

        assert not result.ok
        assert result.image is None
        assert result.reason == "http 404"

    def test_transport_error_is_failure(self, fake_session):
        result = fetch_image("https://unreachable.test/p.png")

        assert not result.ok
        assert result.reason.startswith("transport:")

    def test_timeout_is_failure(self, fake_session):
        url = "https://slow.test/p.png"
        fake_session.routes[url] = requests.Timeout("read timed out")

        result = fetch_image(url, timeout=0.1)

        assert not result.ok
        assert "timed out" in result.reason

    def test_empty_body_is_failure(self, fake_session):
        url = "https://posters.test/empty.png"
        fake_session.routes[url] = (200, b"")

        result = fetch_image(url)

        assert not result.ok
        assert result.reason == "empty body"

    def test_non_image_body_is_decode_failure(self, fake_session):
        url = "https://posters.test/page.html"
        fake_session.routes[url] = (200, b"<html>definitely not a poster</html>")

        result = fetch_image(url)

        assert not result.ok
        assert result.reason.startswith("decode:")

    def test_unexpected_error_does_not_escape(self, fake_session):
        url = "https://posters.test/boom.png"
        fake_session.routes[url] = RuntimeError("boom")

        result = fetch_image(url)

        assert not result.ok
        assert "boom" in result.reason

    def test_bare_host_is_fetched_over_https(self, fake_session):
        fake_session.routes["https://posters.test/red.png"] = (200, png_bytes(RED))

        result = fetch_image("posters.test/red.png")

        assert result.ok
        assert result.url == "posters.test/red.png"

    def test_unparseable_url_is_failure(self, fake_session):
        result = fetch_image("x://[broken")

        assert not result.ok
        assert result.reason.startswith("invalid url:")
        assert fake_session.calls == []
