"""Image conversion utilities for framelens.

Frames travel through the pipeline as read-only RGBA ``uint8`` numpy
arrays. These helpers convert to and from the formats used by the
capture backend (BGRA), Pillow (OCR engines) and OpenCV (PNG output).
"""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def freeze(image: np.ndarray) -> np.ndarray:
    """Mark an image read-only so it can be shared without copying."""
    image.flags.writeable = False
    return image


def bgra_to_rgba(buffer: np.ndarray) -> np.ndarray:
    """Convert a BGRA screen grab (mss layout) to a frozen RGBA image."""
    rgba = cv2.cvtColor(np.ascontiguousarray(buffer), cv2.COLOR_BGRA2RGBA)
    return freeze(rgba)


def pil_to_rgba(image: Image.Image) -> np.ndarray:
    """Convert any PIL image to a frozen RGBA numpy array."""
    return freeze(np.array(image.convert("RGBA")))


def rgba_to_pil(image: np.ndarray) -> Image.Image:
    """Convert an RGBA (or grey / RGB) numpy array to a PIL image."""
    return Image.fromarray(np.ascontiguousarray(image))


def load_image(path: Path | str) -> np.ndarray:
    """Load an image file from disk as a frozen RGBA array."""
    with Image.open(path) as img:
        return pil_to_rgba(img)


def save_png(image: np.ndarray, path: Path | str) -> None:
    """Write an RGBA image to a PNG file."""
    bgra = cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(str(path), bgra):
        raise ValueError(f"Failed to write PNG to {path}")
    logger.debug("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
