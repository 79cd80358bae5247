"""Abstract base class for screen capture backends.

A backend supplies raw pixels on demand: the image of one monitor, and
images of the currently visible windows. Implementations may block
internally but expose coroutines so the adapter can run both requests
concurrently.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np

from framelens.domain.models import WindowCapture

logger = logging.getLogger(__name__)


class CaptureBackend(ABC):
    """Abstract interface for monitor and window capture."""

    @abstractmethod
    async def capture_image(self, monitor_id: int) -> np.ndarray:
        """Capture one monitor.

        Returns:
            A read-only RGBA uint8 array of shape (height, width, 4).

        Raises:
            CaptureError: If the monitor cannot be captured.
        """
        ...

    @abstractmethod
    async def capture_visible_windows(self) -> list[WindowCapture]:
        """Capture every visible, non-minimized window.

        Raises:
            SecondaryCaptureFailed: If window enumeration or capture fails.
        """
        ...
