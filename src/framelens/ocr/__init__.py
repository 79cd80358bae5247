"""OCR engines and line reconstruction for framelens.

Public API:
    OcrEngine -- Abstract base class
    reconstruct_lines / flatten_text -- token stream to line records
    create_ocr_engine -- engine selection from configuration
    TesseractOcr, WindowsNativeOcr, AppleNativeOcr -- concrete engines
"""

from __future__ import annotations

from framelens.config.settings import OcrConfig
from framelens.domain.models import OcrEngineKind
from framelens.ocr.base import OcrEngine, TokenOcrEngine
from framelens.ocr.reconstruct import flatten_text, reconstruct_lines

__all__ = [
    "AppleNativeOcr",
    "OcrEngine",
    "TesseractOcr",
    "TokenOcrEngine",
    "WindowsNativeOcr",
    "create_ocr_engine",
    "flatten_text",
    "reconstruct_lines",
]

_NATIVE_LANGS = {"eng": "en", "deu": "de", "fra": "fr", "spa": "es", "jpn": "ja"}


def create_ocr_engine(config: OcrConfig | None = None) -> OcrEngine:
    """Build the OCR engine selected in the configuration."""
    config = config or OcrConfig()
    if config.engine == OcrEngineKind.TESSERACT:
        from framelens.ocr.tesseract import TesseractOcr
        return TesseractOcr(config)

    lang = _NATIVE_LANGS.get(config.lang, config.lang)
    if config.engine == OcrEngineKind.WINDOWS_NATIVE:
        from framelens.ocr.native import WindowsNativeOcr
        return WindowsNativeOcr(lang=lang)
    from framelens.ocr.native import AppleNativeOcr
    return AppleNativeOcr(lang=lang)


def __getattr__(name: str) -> type:
    """Lazy import for concrete engines that require external deps."""
    if name == "TesseractOcr":
        from framelens.ocr.tesseract import TesseractOcr
        return TesseractOcr
    if name in ("WindowsNativeOcr", "AppleNativeOcr"):
        from framelens.ocr import native
        return getattr(native, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
