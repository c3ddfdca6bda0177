"""Mean color feature extraction."""

from __future__ import annotations


import cv2
import numpy as np
from PIL import Image

# Channel order is always (R, G, B).
MeanColor = tuple[float, float, float]

ZERO_COLOR: MeanColor = (0.0, 0.0, 0.0)


def mean_rgb(img: Image.Image | None) -> MeanColor:
    """Return the per-channel arithmetic mean of *img* as an (R, G, B) tuple.

    A missing or zero-size image yields :data:`ZERO_COLOR`, which the ranker
    treats as degenerate.
    """
    if img is None:
        return ZERO_COLOR

    rgb_image = img.convert("RGB") if img.mode != "RGB" else img
    np_pixels = np.asarray(rgb_image)
    if np_pixels.size == 0:
        return ZERO_COLOR

    red, green, blue, _ = cv2.mean(np_pixels)
    return (float(red), float(green), float(blue))
