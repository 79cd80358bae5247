"""Core domain models for the framelens pipeline.

These models represent the data flowing through a single frame's
processing: the captured monitor and window images, OCR word tokens
from the backend, the reconstructed line records, and the per-frame
report handed back to the caller.
"""

from __future__ import annotations

import enum
import json
from datetime import datetime, timedelta

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

# Confidence value reported by engines that do not score their output
CONFIDENCE_UNAVAILABLE = "n/a"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class OcrEngineKind(str, enum.Enum):
    """Which OCR backend produces the word tokens."""

    TESSERACT = "tesseract"
    WINDOWS_NATIVE = "windows_native"
    APPLE_NATIVE = "apple_native"


# ---------------------------------------------------------------------------
# Capture Models
# ---------------------------------------------------------------------------


class WindowCapture(BaseModel):
    """An image of a single visible window plus its identification."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: np.ndarray = Field(description="RGBA window image")
    title: str = Field(default="")
    app_name: str = Field(default="")
    is_focused: bool = Field(default=False)


class CaptureResult(BaseModel):
    """Everything produced by one capture call.

    The caller owns the result after it is returned; the adapter keeps
    no reference to it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: np.ndarray = Field(description="Primary monitor image, RGBA uint8, read-only")
    windows: list[WindowCapture] = Field(default_factory=list)
    image_hash: int = Field(ge=0, lt=2**64, description="Fingerprint of the primary image")
    capture_duration: timedelta = Field(description="Wall-clock time of the primary capture")
    timestamp: datetime = Field(default_factory=datetime.now)
    monitor_id: int = Field(default=0, ge=0)

    @property
    def width(self) -> int:
        return int(self.image.shape[1])

    @property
    def height(self) -> int:
        return int(self.image.shape[0])


# ---------------------------------------------------------------------------
# Change Tracking Models
# ---------------------------------------------------------------------------


class MaxAverageFrame(BaseModel):
    """The frame with the highest change score seen in the current window."""

    model_config = ConfigDict(frozen=True)

    frame_number: int = Field(ge=0)
    score: float = Field(default=0.0)


# ---------------------------------------------------------------------------
# OCR Models
# ---------------------------------------------------------------------------


class OcrToken(BaseModel):
    """One row of word-level OCR output.

    The position fields follow Tesseract's TSV hierarchy. ``word_num == 0``
    marks a structural row (page, block, paragraph or line start) rather
    than a real word.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="")
    confidence: float = Field(default=-1.0, le=100.0)
    level: int = Field(default=5, ge=0)
    page_num: int = Field(default=1, ge=0)
    block_num: int = Field(default=0, ge=0)
    par_num: int = Field(default=0, ge=0)
    line_num: int = Field(default=0, ge=0)
    word_num: int = Field(default=0, ge=0)

    @property
    def is_line_marker(self) -> bool:
        return self.word_num == 0

    @property
    def line_position(self) -> str:
        return (
            f"level{self.level}page_num{self.page_num}block_num{self.block_num}"
            f"par_num{self.par_num}line_num{self.line_num}"
        )


class LineRecord(BaseModel):
    """A reconstructed line of text with its averaged confidence."""

    model_config = ConfigDict(frozen=True)

    text: str
    confidence: str = Field(description="Average word confidence, two decimals, or 'n/a'")
    line_position: str = Field(default="")


class OcrResult(BaseModel):
    """Lines and flattened text produced for one image."""

    text: str = Field(default="")
    lines: list[LineRecord] = Field(default_factory=list)
    engine: OcrEngineKind = Field(default=OcrEngineKind.TESSERACT)

    def to_json(self) -> str:
        """Render the lines as a pretty-printed JSON array."""
        return json.dumps([line.model_dump() for line in self.lines], indent=2)


# ---------------------------------------------------------------------------
# Pipeline Models
# ---------------------------------------------------------------------------


class FrameReport(BaseModel):
    """Outcome of processing one frame through the pipeline."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    frame_number: int = Field(ge=0)
    capture: CaptureResult
    score: float = Field(default=0.0, description="Combined change score vs. the previous frame")
    compared: bool = Field(default=False, description="Whether a comparison was performed")
    max_frame: MaxAverageFrame | None = Field(default=None)
    ocr: OcrResult | None = Field(default=None)
    new_lines: list[LineRecord] = Field(default_factory=list)
