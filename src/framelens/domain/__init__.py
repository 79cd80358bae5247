"""Domain models and errors for framelens.

This package contains the core data structures and the error taxonomy
used throughout the pipeline. All models use Pydantic v2.
"""

from framelens.domain.errors import (
    CaptureError,
    CaptureFailed,
    DimensionMismatch,
    FramelensError,
    IncompatibleInput,
    OcrError,
    SecondaryCaptureFailed,
    SimilarityError,
)
from framelens.domain.models import (
    CONFIDENCE_UNAVAILABLE,
    CaptureResult,
    FrameReport,
    LineRecord,
    MaxAverageFrame,
    OcrEngineKind,
    OcrResult,
    OcrToken,
    WindowCapture,
)

__all__ = [
    "CONFIDENCE_UNAVAILABLE",
    "CaptureError",
    "CaptureFailed",
    "CaptureResult",
    "DimensionMismatch",
    "FrameReport",
    "FramelensError",
    "IncompatibleInput",
    "LineRecord",
    "MaxAverageFrame",
    "OcrEngineKind",
    "OcrError",
    "OcrResult",
    "OcrToken",
    "SecondaryCaptureFailed",
    "SimilarityError",
    "WindowCapture",
]
