"""Perceptual change between consecutive frames.

Two independent metrics are combined into one change score:

- a Hellinger distance between the intensity histograms (0 = identical
  distributions, works on images of any size), and
- a mean structural similarity index (1 = structurally identical,
  requires equal dimensions).

The combined score is ``(histogram + (1 - ssim)) / 2``; larger means
more different.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np

from framelens.domain.errors import DimensionMismatch, IncompatibleInput

logger = logging.getLogger(__name__)

_C1 = (0.01 * 255) ** 2
_C2 = (0.03 * 255) ** 2

_GRAY_CONVERSIONS = {
    3: cv2.COLOR_RGB2GRAY,
    4: cv2.COLOR_RGBA2GRAY,
}


def to_luma(image: np.ndarray) -> np.ndarray:
    """Convert an RGBA, RGB or grey image to a single-channel uint8 image.

    Raises:
        IncompatibleInput: If the array is not an image OpenCV can convert.
    """
    if not isinstance(image, np.ndarray) or image.size == 0:
        raise IncompatibleInput("Expected a non-empty numpy image")
    if image.dtype != np.uint8:
        raise IncompatibleInput(f"Expected uint8 pixels, got {image.dtype}")
    if image.ndim == 2:
        return image
    if image.ndim != 3:
        raise IncompatibleInput(f"Unsupported image shape {image.shape}")

    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    code = _GRAY_CONVERSIONS.get(channels)
    if code is None:
        raise IncompatibleInput(f"Unsupported channel count {channels}")
    try:
        return cv2.cvtColor(image, code)
    except cv2.error as e:
        raise IncompatibleInput(f"Failed to convert image to grayscale: {e}") from e


def compare_images_histogram(image1: np.ndarray, image2: np.ndarray) -> float:
    """Hellinger distance between the intensity histograms of two images.

    Each histogram is computed independently, so the images may differ
    in size.
    """
    hist1 = cv2.calcHist([to_luma(image1)], [0], None, [256], [0, 256])
    hist2 = cv2.calcHist([to_luma(image2)], [0], None, [256], [0, 256])
    try:
        return float(cv2.compareHist(hist1, hist2, cv2.HISTCMP_HELLINGER))
    except cv2.error as e:
        raise IncompatibleInput(f"Failed to compare images: {e}") from e


def compare_images_ssim(
    image1: np.ndarray,
    image2: np.ndarray,
    window: int = 11,
    sigma: float = 1.5,
) -> float:
    """Mean structural similarity of two images over Gaussian windows.

    Raises:
        DimensionMismatch: If the images differ in width or height.
    """
    gray1 = to_luma(image1)
    gray2 = to_luma(image2)
    if gray1.shape != gray2.shape:
        raise DimensionMismatch(gray1.shape, gray2.shape)

    # Gaussian kernels need an odd size
    if window % 2 == 0:
        window += 1
    ksize = (window, window)

    x = gray1.astype(np.float64)
    y = gray2.astype(np.float64)

    mu_x = cv2.GaussianBlur(x, ksize, sigma)
    mu_y = cv2.GaussianBlur(y, ksize, sigma)
    mu_x_sq = mu_x * mu_x
    mu_y_sq = mu_y * mu_y
    mu_xy = mu_x * mu_y

    sigma_x_sq = cv2.GaussianBlur(x * x, ksize, sigma) - mu_x_sq
    sigma_y_sq = cv2.GaussianBlur(y * y, ksize, sigma) - mu_y_sq
    sigma_xy = cv2.GaussianBlur(x * y, ksize, sigma) - mu_xy

    numerator = (2 * mu_xy + _C1) * (2 * sigma_xy + _C2)
    denominator = (mu_x_sq + mu_y_sq + _C1) * (sigma_x_sq + sigma_y_sq + _C2)
    return float(np.mean(numerator / denominator))


def combined_score(histogram_distance: float, ssim: float) -> float:
    """Average of the histogram distance and the structural dissimilarity."""
    return (histogram_distance + (1.0 - ssim)) / 2.0


def compare_with_previous(
    previous_image: np.ndarray | None,
    current_image: np.ndarray,
    frame_number: int,
    window: int = 11,
    sigma: float = 1.5,
) -> float:
    """Change score of ``current_image`` against the previous frame.

    The first frame of a session has nothing to compare against and
    scores 0.0. Comparison errors propagate to the caller.
    """
    if previous_image is None:
        logger.debug("No previous image to compare for frame %d", frame_number)
        return 0.0

    histogram_diff = compare_images_histogram(previous_image, current_image)
    ssim = compare_images_ssim(previous_image, current_image, window, sigma)
    current_average = combined_score(histogram_diff, ssim)
    logger.debug(
        "Frame %d: Histogram diff: %.3f, SSIM diff: %.3f, Current Average: %.3f",
        frame_number, histogram_diff, 1.0 - ssim, current_average,
    )
    return current_average
