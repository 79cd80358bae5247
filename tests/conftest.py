"""Shared test fixtures for the framelens test suite.

Provides common fixtures used across unit tests: sample RGBA frames,
OCR token streams, and fake capture backends / OCR engines. Builders
that tests call with their own arguments are exposed as factory
fixtures (``make_image``, ``word``, ``backend_factory``...).
"""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from framelens.capture.base import CaptureBackend
from framelens.domain.errors import SecondaryCaptureFailed
from framelens.domain.models import (
    LineRecord,
    OcrEngineKind,
    OcrResult,
    OcrToken,
    WindowCapture,
)
from framelens.utils.imaging import freeze


# ---------------------------------------------------------------------------
# Frame / Image Fixtures
# ---------------------------------------------------------------------------


def _solid_image(width: int = 100, height: int = 100, value: int = 0) -> np.ndarray:
    """A solid RGBA image with opaque alpha."""
    image = np.full((height, width, 4), value, dtype=np.uint8)
    image[:, :, 3] = 255
    return freeze(image)


def _noise_image(width: int = 100, height: int = 100, seed: int = 7) -> np.ndarray:
    """A reproducible random RGBA image."""
    rng = np.random.default_rng(seed)
    image = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    image[:, :, 3] = 255
    return freeze(image)


@pytest.fixture
def make_image() -> Callable[..., np.ndarray]:
    """Factory for solid RGBA images: ``make_image(width, height, value)``."""
    return _solid_image


@pytest.fixture
def make_noise_image() -> Callable[..., np.ndarray]:
    """Factory for seeded random RGBA images: ``make_noise_image(width, height, seed)``."""
    return _noise_image


@pytest.fixture
def sample_image() -> np.ndarray:
    """A minimal 100x100 black RGBA image."""
    return _solid_image()


@pytest.fixture
def noise_image() -> np.ndarray:
    """A 100x100 random RGBA image."""
    return _noise_image()


# ---------------------------------------------------------------------------
# OCR Fixtures
# ---------------------------------------------------------------------------


def _word(text: str, word_num: int, conf: float = 90.0, line_num: int = 1) -> OcrToken:
    return OcrToken(
        text=text, confidence=conf, level=5, page_num=1, block_num=1,
        par_num=1, line_num=line_num, word_num=word_num,
    )


def _marker(line_num: int = 1, level: int = 4) -> OcrToken:
    return OcrToken(
        text="", confidence=-1.0, level=level, page_num=1, block_num=1,
        par_num=1, line_num=line_num, word_num=0,
    )


@pytest.fixture
def word() -> Callable[..., OcrToken]:
    """Factory for word rows: ``word(text, word_num, conf=90.0, line_num=1)``."""
    return _word


@pytest.fixture
def marker() -> Callable[..., OcrToken]:
    """Factory for ``word_num == 0`` structure rows: ``marker(line_num, level=4)``."""
    return _marker


@pytest.fixture
def hello_world_tokens() -> list[OcrToken]:
    """One line bracketed by line markers."""
    return [
        _marker(1),
        _word("hello", 1, conf=90.0),
        _word("world", 2, conf=80.0),
        _marker(1),
    ]


@pytest.fixture
def sample_ocr_result() -> OcrResult:
    lines = [
        LineRecord(text="hello world", confidence="85.00", line_position="level5page_num1block_num1par_num1line_num1"),
        LineRecord(text="second line", confidence="70.00", line_position="level5page_num1block_num1par_num1line_num2"),
    ]
    return OcrResult(text="hello world second line", lines=lines, engine=OcrEngineKind.TESSERACT)


# ---------------------------------------------------------------------------
# Mock Fixtures
# ---------------------------------------------------------------------------


class FakeBackend(CaptureBackend):
    """A CaptureBackend returning queued images.

    ``images`` items may be arrays or exceptions to raise.
    """

    def __init__(self, images=None, windows=None, windows_error: Exception | None = None) -> None:
        self.images = list(images or [])
        self.windows = list(windows or [])
        self.windows_error = windows_error
        self.monitor_ids: list[int] = []

    async def capture_image(self, monitor_id: int) -> np.ndarray:
        self.monitor_ids.append(monitor_id)
        item = self.images.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def capture_visible_windows(self) -> list[WindowCapture]:
        if self.windows_error is not None:
            raise self.windows_error
        return self.windows


@pytest.fixture
def backend_factory() -> Callable[..., FakeBackend]:
    """Factory for FakeBackends: ``backend_factory(images=[...], windows=[...])``."""
    return FakeBackend


@pytest.fixture
def fake_backend(sample_image: np.ndarray) -> FakeBackend:
    window = WindowCapture(image=_solid_image(20, 10, 50), title="Editor", app_name="code.exe", is_focused=True)
    return FakeBackend(images=[sample_image], windows=[window])


@pytest.fixture
def failing_windows_backend(sample_image: np.ndarray) -> FakeBackend:
    return FakeBackend(
        images=[sample_image],
        windows_error=SecondaryCaptureFailed("window enumeration failed"),
    )


@pytest.fixture
def mock_ocr_engine(sample_ocr_result: OcrResult) -> MagicMock:
    """An OcrEngine stand-in returning a fixed result."""
    mock = MagicMock()
    mock.kind = OcrEngineKind.TESSERACT
    mock.perform_ocr.return_value = sample_ocr_result
    mock.perform_ocr_async = AsyncMock(return_value=sample_ocr_result)
    return mock
