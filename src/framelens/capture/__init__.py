"""Screen capture for framelens.

Public API:
    CaptureBackend -- Abstract base class
    capture_frame -- one timed, fingerprinted frame with window captures
    ScreenCaptureBackend -- mss implementation
"""

from framelens.capture.adapter import capture_frame
from framelens.capture.base import CaptureBackend

__all__ = ["CaptureBackend", "ScreenCaptureBackend", "capture_frame"]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "ScreenCaptureBackend":
        from framelens.capture.screen import ScreenCaptureBackend
        return ScreenCaptureBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
