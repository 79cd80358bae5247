"""Error taxonomy for framelens.

Every error is scoped to the frame or file operation that raised it.
Recoverable classes (``SecondaryCaptureFailed``, ``DimensionMismatch``)
are expected to be branched on by the caller.
"""

from __future__ import annotations


class FramelensError(Exception):
    """Base class for all framelens errors."""


class CaptureError(FramelensError):
    """Raised when a capture backend call fails."""


class CaptureFailed(CaptureError):
    """The primary monitor capture failed; the frame is lost."""


class SecondaryCaptureFailed(CaptureError):
    """Window sub-capture failed; the primary capture is still usable."""


class SimilarityError(FramelensError):
    """Raised when two images cannot be compared."""


class DimensionMismatch(SimilarityError):
    """The images differ in width or height."""

    def __init__(self, first: tuple[int, ...], second: tuple[int, ...]) -> None:
        super().__init__(
            f"Images have different dimensions: {first[1]}x{first[0]} vs {second[1]}x{second[0]}"
        )
        self.first = first
        self.second = second


class IncompatibleInput(SimilarityError):
    """An image could not be converted to single-channel intensity."""


class OcrError(FramelensError):
    """Raised when an OCR backend fails or is unavailable."""
