"""Tests for the frame capture adapter."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Callable

import numpy as np
import pytest

from framelens.capture.adapter import capture_frame
from framelens.capture.base import CaptureBackend
from framelens.domain.errors import CaptureError, CaptureFailed
from framelens.vision.fingerprint import calculate_hash


class TestCaptureBackendInterface:
    def test_cannot_instantiate_abstract_class(self) -> None:
        """CaptureBackend should not be instantiable directly."""
        with pytest.raises(TypeError):
            CaptureBackend()  # type: ignore[abstract]


class TestCaptureFrame:
    @pytest.mark.asyncio
    async def test_success(self, fake_backend: CaptureBackend, sample_image: np.ndarray) -> None:
        result = await capture_frame(fake_backend, monitor_id=2)
        assert result.image is sample_image
        assert result.image_hash == calculate_hash(sample_image)
        assert isinstance(result.capture_duration, timedelta)
        assert result.capture_duration >= timedelta(0)
        assert result.monitor_id == 2
        assert fake_backend.monitor_ids == [2]
        assert len(result.windows) == 1
        assert result.windows[0].title == "Editor"
        assert result.windows[0].is_focused

    @pytest.mark.asyncio
    async def test_image_is_read_only(self, backend_factory: Callable[..., CaptureBackend]) -> None:
        writable = np.zeros((4, 4, 4), dtype=np.uint8)
        result = await capture_frame(backend_factory(images=[writable]))
        assert not result.image.flags.writeable

    @pytest.mark.asyncio
    async def test_window_failure_is_not_fatal(
        self, failing_windows_backend: CaptureBackend, sample_image: np.ndarray, caplog: pytest.LogCaptureFixture
    ) -> None:
        result = await capture_frame(failing_windows_backend)
        assert result.image is not None
        assert result.image_hash == calculate_hash(sample_image)
        assert result.windows == []
        assert "Failed to capture window images" in caplog.text

    @pytest.mark.asyncio
    async def test_primary_failure_is_fatal(self, backend_factory: Callable[..., CaptureBackend]) -> None:
        backend = backend_factory(images=[CaptureError("display asleep")])
        with pytest.raises(CaptureFailed) as exc_info:
            await capture_frame(backend)
        assert isinstance(exc_info.value.__cause__, CaptureError)

    @pytest.mark.asyncio
    async def test_windows_skipped_when_disabled(self, fake_backend: CaptureBackend) -> None:
        result = await capture_frame(fake_backend, capture_windows=False)
        assert result.windows == []

    @pytest.mark.asyncio
    async def test_timeout_abandons_capture(self, sample_image: np.ndarray) -> None:
        class SlowBackend(CaptureBackend):
            async def capture_image(self, monitor_id: int) -> np.ndarray:
                await asyncio.sleep(10)
                return sample_image

            async def capture_visible_windows(self) -> list:
                return []

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(capture_frame(SlowBackend()), timeout=0.05)
