"""Frame capture adapter.

Wraps a CaptureBackend call for one frame: times and fingerprints the
primary monitor image and attaches window sub-captures. A failed
primary capture loses the frame; a failed window capture only loses the
window detail.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timedelta

import numpy as np

from framelens.capture.base import CaptureBackend
from framelens.domain.errors import CaptureFailed
from framelens.domain.models import CaptureResult, WindowCapture
from framelens.utils.imaging import freeze
from framelens.vision.fingerprint import calculate_hash

logger = logging.getLogger(__name__)


async def _capture_primary(
    backend: CaptureBackend, monitor_id: int
) -> tuple[np.ndarray, int, timedelta]:
    capture_start = time.monotonic()
    try:
        image = await backend.capture_image(monitor_id)
    except Exception as e:
        logger.error("Failed to capture monitor %d image: %s", monitor_id, e)
        raise CaptureFailed(f"Monitor {monitor_id} capture failed") from e
    image = freeze(image)
    image_hash = calculate_hash(image)
    return image, image_hash, timedelta(seconds=time.monotonic() - capture_start)


async def _capture_windows(backend: CaptureBackend) -> list[WindowCapture]:
    try:
        windows = await backend.capture_visible_windows()
    except Exception as e:
        logger.warning("Failed to capture window images: %s. Continuing with empty result.", e)
        return []
    logger.debug("Captured %d window images", len(windows))
    return windows


async def capture_frame(
    backend: CaptureBackend,
    monitor_id: int = 1,
    capture_windows: bool = True,
) -> CaptureResult:
    """Capture one monitor frame plus the visible windows.

    The window request runs concurrently with the primary capture. When
    the caller cancels (for example through ``asyncio.wait_for``) both
    requests are abandoned and nothing is returned.

    Raises:
        CaptureFailed: If the primary monitor capture fails.
    """
    timestamp = datetime.now()
    windows_task = (
        asyncio.ensure_future(_capture_windows(backend)) if capture_windows else None
    )
    try:
        image, image_hash, duration = await _capture_primary(backend, monitor_id)
        windows = await windows_task if windows_task is not None else []
    finally:
        if windows_task is not None and not windows_task.done():
            windows_task.cancel()

    logger.debug(
        "Captured monitor %d (%dx%d) in %.3fs, hash=%016x, %d windows",
        monitor_id, image.shape[1], image.shape[0],
        duration.total_seconds(), image_hash, len(windows),
    )
    return CaptureResult(
        image=image,
        windows=windows,
        image_hash=image_hash,
        capture_duration=duration,
        timestamp=timestamp,
        monitor_id=monitor_id,
    )
