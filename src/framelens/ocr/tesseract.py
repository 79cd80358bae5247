"""Tesseract OCR engine via pytesseract."""

from __future__ import annotations

import logging

import numpy as np
import pytesseract

from framelens.config.settings import OcrConfig
from framelens.domain.errors import OcrError
from framelens.domain.models import OcrEngineKind, OcrToken
from framelens.ocr.base import TokenOcrEngine
from framelens.utils.imaging import rgba_to_pil

logger = logging.getLogger(__name__)

_POSITION_KEYS = ("level", "page_num", "block_num", "par_num", "line_num", "word_num")


def _to_float(raw: object) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return -1.0


def data_to_tokens(data: dict[str, list]) -> list[OcrToken]:
    """Convert pytesseract's ``Output.DICT`` columns into tokens."""
    total = len(data.get("text", []))
    tokens: list[OcrToken] = []
    for i in range(total):
        text = data["text"][i]
        tokens.append(
            OcrToken(
                text="" if text is None else str(text),
                confidence=_to_float(data["conf"][i]),
                **{key: int(data[key][i]) for key in _POSITION_KEYS},
            )
        )
    return tokens


class TesseractOcr(TokenOcrEngine):
    """Word-level OCR with Tesseract.

    Language, DPI, page segmentation mode and engine mode are passed
    straight through to the tesseract binary.
    """

    kind = OcrEngineKind.TESSERACT

    def __init__(self, config: OcrConfig | None = None) -> None:
        self._config = config or OcrConfig()
        if self._config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self._config.tesseract_cmd

    @property
    def tesseract_config(self) -> str:
        c = self._config
        return f"--dpi {c.dpi} --psm {c.psm} --oem {c.oem} -c tessedit_create_tsv=1"

    def extract_tokens(self, image: np.ndarray) -> list[OcrToken]:
        try:
            data = pytesseract.image_to_data(
                rgba_to_pil(image).convert("RGB"),
                lang=self._config.lang,
                config=self.tesseract_config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            logger.error("Tesseract failed: %s", e)
            raise OcrError(f"Tesseract OCR failed: {e}") from e
        return data_to_tokens(data)
