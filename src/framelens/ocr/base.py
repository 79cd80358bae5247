"""Abstract base class for OCR engines.

Every engine turns an RGBA frame into an OcrResult. Engines that report
word-level tokens share the line reconstruction; platform services that
only return plain text produce a single unscored line. The engine is
chosen once from configuration.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

import numpy as np

from framelens.domain.models import OcrEngineKind, OcrResult, OcrToken
from framelens.ocr.reconstruct import flatten_text, reconstruct_lines

logger = logging.getLogger(__name__)


class OcrEngine(ABC):
    """Abstract interface for OCR backends."""

    kind: OcrEngineKind

    @abstractmethod
    def perform_ocr(self, image: np.ndarray) -> OcrResult:
        """Recognize the text in an RGBA image.

        Raises:
            OcrError: If the backend fails or is unavailable.
        """
        ...

    async def perform_ocr_async(self, image: np.ndarray) -> OcrResult:
        """Run ``perform_ocr`` in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.perform_ocr, image)


class TokenOcrEngine(OcrEngine):
    """An engine whose backend yields word-level tokens."""

    @abstractmethod
    def extract_tokens(self, image: np.ndarray) -> list[OcrToken]:
        """Return the backend's word tokens in reading order."""
        ...

    def perform_ocr(self, image: np.ndarray) -> OcrResult:
        tokens = self.extract_tokens(image)
        lines = reconstruct_lines(tokens)
        logger.debug("%s: %d tokens -> %d lines", type(self).__name__, len(tokens), len(lines))
        return OcrResult(text=flatten_text(lines), lines=lines, engine=self.kind)
