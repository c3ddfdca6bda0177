"""Shared fixtures for poster_recs tests."""

from io import BytesIO

import pytest
import requests
from PIL import Image

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def solid_image(color, size=(40, 60), mode="RGB"):
    """Create a single-color Pillow image."""
    return Image.new(mode, size, color)


def png_bytes(color, size=(40, 60), mode="RGB"):
    """Encode a single-color image as PNG."""
    buffer = BytesIO()
    solid_image(color, size, mode).save(buffer, format="PNG")
    return buffer.getvalue()


def make_response(url, status_code=200, content=b""):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.url = url
    return response


class FakeSession:
    """Stand-in for the shared requests session, keyed by URL."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, timeout=None, allow_redirects=True):
        self.calls.append((url, timeout))
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"Failed to resolve {url}")
        if isinstance(outcome, Exception):
            raise outcome
        status_code, content = outcome
        return make_response(url, status_code, content)


@pytest.fixture
def fake_session(monkeypatch):
    from poster_recs.crawl import fetch

    session = FakeSession()
    monkeypatch.setattr(fetch, "_poster_session", lambda: session)
    return session
