"""Frame comparison for framelens.

Public API:
    calculate_hash -- 64-bit content fingerprint
    compare_with_previous -- combined change score vs. the previous frame
    ChangeTracker -- keyframe (max change) tracking
"""

from framelens.vision.fingerprint import calculate_hash, frames_identical
from framelens.vision.similarity import (
    compare_images_histogram,
    compare_images_ssim,
    compare_with_previous,
)
from framelens.vision.tracker import ChangeTracker

__all__ = [
    "ChangeTracker",
    "calculate_hash",
    "compare_images_histogram",
    "compare_images_ssim",
    "compare_with_previous",
    "frames_identical",
]
