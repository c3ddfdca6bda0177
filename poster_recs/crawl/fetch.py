"""HTTP fetching of poster images for the recommendation pipeline."""

from __future__ import annotations

import logging
from threading import Lock
from urllib.parse import urlparse

import requests
from requests import Session
from PIL import UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..extract.normalize import decode_image
from ..io.models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

_session_lock = Lock()
_session: Session | None = None


def _poster_session() -> Session:
    """Return the session shared by every poster worker thread.

    Poster hosts commonly serve a placeholder page to non-browser agents, so
    the session presents a browser User-Agent and asks for images first.
    """
    global _session
    if _session is None:
        with _session_lock:
            if _session is None:
                session = requests.Session()
                session.headers.update(
                    {
                        "User-Agent": _USER_AGENT,
                        "Accept": "image/*,*/*;q=0.8",
                    }
                )
                _session = session
    return _session


def _qualify_poster_url(url: str) -> str:
    """Return the URL to request for a catalog poster link.

    Poster links stored without a scheme (``cdn.test/p.jpg``) or as
    protocol-relative links (``//cdn.test/p.jpg``) are fetched over https.
    Raises :class:`ValueError` for links :func:`urlparse` rejects.
    """
    cleaned = url.strip()
    if not cleaned:
        return cleaned
    if cleaned.startswith(("http://", "https://")):
        return cleaned
    if cleaned.startswith("//"):
        return f"https:{cleaned}"
    parsed = urlparse(cleaned)
    if parsed.scheme:
        return cleaned
    return f"https://{cleaned}"


def _download(url: str, timeout: float) -> bytes:
    """Issue a single GET for *url* and return the response body."""
    session = _poster_session()
    response = session.get(url, timeout=timeout, allow_redirects=True)
    response.raise_for_status()
    return response.content


def fetch_image(url: str, timeout: float = DEFAULT_TIMEOUT) -> FetchResult:
    """Download *url* and decode it as an RGB poster image.

    Exactly one attempt is made. Every failure (transport, HTTP status,
    empty body, undecodable payload) is returned as a failed
    :class:`FetchResult` and logged; nothing is raised to the caller.
    """
    try:
        target_url = _qualify_poster_url(url or "")
        payload = _download(target_url, timeout)
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "?"
        return _failed(url, f"http {status}")
    except requests.RequestException as exc:
        return _failed(url, f"transport: {exc}")
    except ValueError as exc:
        return _failed(url, f"invalid url: {exc}")
    except Exception as exc:  # noqa: BLE001 - a single poster must not abort the batch
        logger.exception("Unexpected error fetching %s", url)
        return FetchResult.failure(url, f"unexpected: {exc}")

    if not payload:
        return _failed(url, "empty body")

    try:
        image = decode_image(payload)
    except (UnidentifiedImageError, DecompressionBombError, OSError, ValueError) as exc:
        return _failed(url, f"decode: {exc}")
    return FetchResult.success(url, image)


def _failed(url: str, reason: str) -> FetchResult:
    logger.warning("Poster fetch failed for %s: %s", url, reason)
    return FetchResult.failure(url, reason)
