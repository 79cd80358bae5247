"""Tests for the mss screen capture backend (mss mocked)."""

from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from framelens.capture.screen import ScreenCaptureBackend
from framelens.domain.errors import CaptureError, SecondaryCaptureFailed


def _mock_mss(monitors: list[dict[str, int]], frame: np.ndarray) -> MagicMock:
    sct = MagicMock()
    sct.monitors = monitors
    sct.grab.return_value = frame
    factory = MagicMock()
    factory.return_value.__enter__.return_value = sct
    return factory


class TestScreenCaptureBackend:
    @pytest.mark.asyncio
    async def test_capture_converts_bgra_to_rgba(self) -> None:
        bgra = np.zeros((2, 3, 4), dtype=np.uint8)
        bgra[:, :, 0] = 10  # blue
        bgra[:, :, 2] = 200  # red
        bgra[:, :, 3] = 255
        monitors = [{"left": 0, "top": 0, "width": 3, "height": 2}] * 2
        with patch("mss.mss", _mock_mss(monitors, bgra)):
            image = await ScreenCaptureBackend().capture_image(1)
        assert image.shape == (2, 3, 4)
        assert image[0, 0, 0] == 200
        assert image[0, 0, 2] == 10
        assert not image.flags.writeable

    @pytest.mark.asyncio
    async def test_unknown_monitor(self) -> None:
        monitors = [{"left": 0, "top": 0, "width": 3, "height": 2}]
        with patch("mss.mss", _mock_mss(monitors, np.zeros((2, 3, 4), dtype=np.uint8))):
            with pytest.raises(CaptureError, match="Monitor 3 not found"):
                await ScreenCaptureBackend().capture_image(3)

    @pytest.mark.skipif(sys.platform == "win32", reason="window capture is supported on Windows")
    @pytest.mark.asyncio
    async def test_windows_unsupported_off_windows(self) -> None:
        with pytest.raises(SecondaryCaptureFailed):
            await ScreenCaptureBackend().capture_visible_windows()
