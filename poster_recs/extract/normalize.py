"""Utilities for decoding posters and normalizing them into a canonical format."""

from __future__ import annotations

from io import BytesIO

from PIL import Image

# (width, height) every cover is resized to before mean colors are compared.
CANONICAL_SIZE: tuple[int, int] = (67, 98)
RESAMPLE_FILTER = Image.Resampling.BILINEAR


def decode_image(image_bytes: bytes) -> Image.Image:
    """Return a fully loaded Pillow image in RGB mode decoded from *image_bytes*."""
    if not image_bytes:
        raise ValueError("Empty image payload cannot be decoded")

    with Image.open(BytesIO(image_bytes)) as img:
        img.load()
        return img.convert("RGB")


def normalize_cover(img: Image.Image | None) -> Image.Image | None:
    """Return *img* resized to :data:`CANONICAL_SIZE`, or ``None`` for a missing cover."""
    if img is None:
        return None

    if img.mode != "RGB":
        img = img.convert("RGB")

    return img.resize(CANONICAL_SIZE, RESAMPLE_FILTER)
