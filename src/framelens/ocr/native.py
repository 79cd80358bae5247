"""Platform-native OCR engines (Windows.Media.Ocr, Apple Vision).

These services return recognized text without per-word confidence, so
each frame becomes a single line whose confidence is reported as
unavailable. The platform libraries are imported on first use.
"""

from __future__ import annotations

import logging
import sys
from abc import abstractmethod

import numpy as np
from PIL import Image

from framelens.domain.errors import OcrError
from framelens.domain.models import (
    CONFIDENCE_UNAVAILABLE,
    LineRecord,
    OcrEngineKind,
    OcrResult,
)
from framelens.ocr.base import OcrEngine
from framelens.utils.imaging import rgba_to_pil

logger = logging.getLogger(__name__)


class NativeTextOcr(OcrEngine):
    """Base for services that only return a full-text string."""

    platform: str

    def __init__(self, lang: str = "en") -> None:
        self._lang = lang

    @abstractmethod
    def recognize_text(self, image: Image.Image) -> str:
        """Return all text the platform service recognized."""
        ...

    def perform_ocr(self, image: np.ndarray) -> OcrResult:
        if sys.platform != self.platform:
            raise OcrError(f"{type(self).__name__} is only available on {self.platform}")
        try:
            text = self.recognize_text(rgba_to_pil(image))
        except ImportError as e:
            raise OcrError(f"{type(self).__name__} backend is not installed: {e}") from e
        except OcrError:
            raise
        except Exception as e:
            logger.error("%s failed: %s", type(self).__name__, e)
            raise OcrError(f"Native OCR failed: {e}") from e
        lines = [LineRecord(text=text, confidence=CONFIDENCE_UNAVAILABLE)] if text else []
        return OcrResult(text=text, lines=lines, engine=self.kind)


class WindowsNativeOcr(NativeTextOcr):
    """OCR through Windows.Media.Ocr using the ``winocr`` bindings."""

    kind = OcrEngineKind.WINDOWS_NATIVE
    platform = "win32"

    def recognize_text(self, image: Image.Image) -> str:
        import winocr

        result = winocr.recognize_pil_sync(image.convert("RGBA"), self._lang)
        return str(result["text"]).strip()


class AppleNativeOcr(NativeTextOcr):
    """OCR through Apple's Vision framework using ``ocrmac``."""

    kind = OcrEngineKind.APPLE_NATIVE
    platform = "darwin"

    def recognize_text(self, image: Image.Image) -> str:
        from ocrmac import ocrmac

        annotations = ocrmac.OCR(image.convert("RGB"), language_preference=[self._lang]).recognize()
        return " ".join(text for text, _confidence, _bbox in annotations if text).strip()
