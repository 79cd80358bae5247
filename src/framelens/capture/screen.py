"""Screen capture backend using mss.

Monitor grabs work on every platform mss supports. Visible window
capture enumerates top-level windows with pywin32 and is only available
on Windows.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, cast

import mss
import numpy as np
import psutil
from mss.exception import ScreenShotError

from framelens.capture.base import CaptureBackend
from framelens.domain.errors import CaptureError, SecondaryCaptureFailed
from framelens.domain.models import WindowCapture
from framelens.utils.imaging import bgra_to_rgba

if sys.platform == "win32":
    import pywintypes
    import win32gui
    import win32process
else:  # pragma: no cover
    pywintypes = cast("Any", None)
    win32gui = cast("Any", None)
    win32process = cast("Any", None)

logger = logging.getLogger(__name__)


def _grab(region: dict[str, int]) -> np.ndarray:
    with mss.mss() as sct:
        shot = sct.grab(region)
        return bgra_to_rgba(np.asarray(shot))


def _app_name(hwnd: int) -> str:
    try:
        _, pid = win32process.GetWindowThreadProcessId(hwnd)
        return psutil.Process(pid).name()
    except (pywintypes.error, psutil.NoSuchProcess, psutil.AccessDenied):
        return ""


def _visible_windows() -> list[tuple[int, str, dict[str, int]]]:
    """Enumerate visible, titled, non-minimized top-level windows."""
    found: list[tuple[int, str, dict[str, int]]] = []

    def _collect(hwnd: int, _: Any) -> bool:
        if not win32gui.IsWindowVisible(hwnd) or win32gui.IsIconic(hwnd):
            return True
        title = win32gui.GetWindowText(hwnd)
        if not title:
            return True
        left, top, right, bottom = win32gui.GetWindowRect(hwnd)
        if right - left > 0 and bottom - top > 0:
            found.append(
                (hwnd, title, {"left": left, "top": top, "width": right - left, "height": bottom - top})
            )
        return True

    win32gui.EnumWindows(_collect, None)
    return found


def _capture_windows_sync() -> list[WindowCapture]:
    focused = win32gui.GetForegroundWindow()
    windows: list[WindowCapture] = []
    for hwnd, title, region in _visible_windows():
        windows.append(
            WindowCapture(
                image=_grab(region),
                title=title,
                app_name=_app_name(hwnd),
                is_focused=hwnd == focused,
            )
        )
    return windows


class ScreenCaptureBackend(CaptureBackend):
    """Captures monitors with mss, running the blocking grabs in a thread pool."""

    async def capture_image(self, monitor_id: int) -> np.ndarray:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._capture_monitor_sync, monitor_id)

    def _capture_monitor_sync(self, monitor_id: int) -> np.ndarray:
        with mss.mss() as sct:
            monitors = sct.monitors
            if monitor_id >= len(monitors):
                raise CaptureError(
                    f"Monitor {monitor_id} not found ({len(monitors) - 1} available)"
                )
            shot = sct.grab(monitors[monitor_id])
            return bgra_to_rgba(np.asarray(shot))

    async def capture_visible_windows(self) -> list[WindowCapture]:
        if sys.platform != "win32":
            raise SecondaryCaptureFailed(f"Window capture is not supported on {sys.platform}")
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _capture_windows_sync)
        except (pywintypes.error, ScreenShotError) as e:
            raise SecondaryCaptureFailed(f"Window capture failed: {e}") from e
