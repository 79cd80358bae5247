"""Tests for platform-native OCR engines and engine selection."""

from __future__ import annotations

import sys
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from framelens.config.settings import OcrConfig
from framelens.domain.errors import OcrError
from framelens.domain.models import CONFIDENCE_UNAVAILABLE, OcrEngineKind
from framelens.ocr import OcrEngine, create_ocr_engine
from framelens.ocr.native import AppleNativeOcr, NativeTextOcr, WindowsNativeOcr
from framelens.ocr.tesseract import TesseractOcr


class StaticTextOcr(NativeTextOcr):
    kind = OcrEngineKind.WINDOWS_NATIVE
    platform = sys.platform

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        super().__init__()
        self.text = text
        self.error = error

    def recognize_text(self, image: Image.Image) -> str:
        if self.error is not None:
            raise self.error
        return self.text


class TestNativeTextOcr:
    def test_single_unscored_line(self, sample_image: np.ndarray) -> None:
        result = StaticTextOcr("File Edit View").perform_ocr(sample_image)
        assert result.text == "File Edit View"
        assert len(result.lines) == 1
        assert result.lines[0].confidence == CONFIDENCE_UNAVAILABLE
        assert result.engine == OcrEngineKind.WINDOWS_NATIVE

    def test_empty_text(self, sample_image: np.ndarray) -> None:
        result = StaticTextOcr("").perform_ocr(sample_image)
        assert result.lines == []
        assert result.text == ""

    def test_missing_library(self, sample_image: np.ndarray) -> None:
        engine = StaticTextOcr(error=ImportError("No module named 'winocr'"))
        with pytest.raises(OcrError, match="not installed"):
            engine.perform_ocr(sample_image)

    def test_service_failure(self, sample_image: np.ndarray) -> None:
        engine = StaticTextOcr(error=RuntimeError("engine busy"))
        with pytest.raises(OcrError, match="engine busy"):
            engine.perform_ocr(sample_image)

    def test_wrong_platform(self, sample_image: np.ndarray) -> None:
        engine = WindowsNativeOcr() if sys.platform != "win32" else AppleNativeOcr()
        with pytest.raises(OcrError, match="only available"):
            engine.perform_ocr(sample_image)


class TestCreateOcrEngine:
    def test_default_is_tesseract(self) -> None:
        engine = create_ocr_engine()
        assert isinstance(engine, TesseractOcr)
        assert isinstance(engine, OcrEngine)

    def test_windows_native(self) -> None:
        engine = create_ocr_engine(OcrConfig(engine=OcrEngineKind.WINDOWS_NATIVE))
        assert isinstance(engine, WindowsNativeOcr)
        assert engine._lang == "en"

    def test_apple_native(self) -> None:
        engine = create_ocr_engine(OcrConfig(engine="apple_native", lang="fra"))
        assert isinstance(engine, AppleNativeOcr)
        assert engine._lang == "fr"

    def test_lazy_attribute(self) -> None:
        import framelens.ocr as ocr_pkg

        assert ocr_pkg.TesseractOcr is TesseractOcr
        with pytest.raises(AttributeError):
            ocr_pkg.NoSuchEngine  # noqa: B018
