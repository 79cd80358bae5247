"""Per-frame processing pipeline.

Ties together capture, change scoring, keyframe tracking, OCR line
reconstruction and the optional text-file output for a single driving
task: capture -> compare -> track -> OCR -> write.
"""

from __future__ import annotations

import asyncio
import logging

import numpy as np

from framelens.capture.adapter import capture_frame
from framelens.capture.base import CaptureBackend
from framelens.config.settings import Settings
from framelens.domain.errors import DimensionMismatch, OcrError
from framelens.domain.models import CaptureResult, FrameReport, LineRecord, OcrResult
from framelens.ocr.base import OcrEngine
from framelens.output.writer import save_text_files
from framelens.vision.fingerprint import frames_identical
from framelens.vision.similarity import compare_with_previous
from framelens.vision.tracker import ChangeTracker

logger = logging.getLogger(__name__)


def new_lines_since(
    current: list[LineRecord], previous: list[LineRecord] | None
) -> list[LineRecord]:
    """Lines of the current frame whose text did not appear in the previous one."""
    if previous is None:
        return list(current)
    seen = {line.text for line in previous}
    return [line for line in current if line.text not in seen]


class FramePipeline:
    """Processes frames in strictly increasing order for one monitor.

    Holds the previous frame's image, fingerprint and OCR lines, and the
    ChangeTracker for the current monitoring window.
    """

    def __init__(
        self,
        backend: CaptureBackend,
        ocr_engine: OcrEngine | None,
        settings: Settings | None = None,
    ) -> None:
        self._backend = backend
        self._ocr = ocr_engine
        self._settings = settings or Settings()
        self._tracker = ChangeTracker()
        self._previous_image: np.ndarray | None = None
        self._previous_hash: int | None = None
        self._previous_lines: list[LineRecord] | None = None

    @property
    def tracker(self) -> ChangeTracker:
        return self._tracker

    @property
    def previous_image(self) -> np.ndarray | None:
        return self._previous_image

    def reset(self) -> None:
        """Start a new monitoring window: forget the previous frame and the max."""
        self._tracker.reset()
        self._previous_image = None
        self._previous_hash = None
        self._previous_lines = None

    async def process_frame(
        self, frame_number: int, capture_timeout: float | None = None
    ) -> FrameReport:
        """Capture and process one frame.

        Args:
            frame_number: Strictly increasing frame number.
            capture_timeout: Seconds allowed for the capture step. OCR and
                output are not bounded by it.

        Raises:
            CaptureFailed: If the primary capture fails; state is unchanged.
            asyncio.TimeoutError: If the capture exceeds ``capture_timeout``;
                state is unchanged.
        """
        cfg = self._settings
        capture = await asyncio.wait_for(
            capture_frame(
                self._backend,
                monitor_id=cfg.capture.monitor_id,
                capture_windows=cfg.capture.capture_windows,
            ),
            timeout=capture_timeout,
        )

        score, compared = self._score(capture, frame_number)
        max_frame = self._tracker.observe(frame_number, score)
        logger.debug(
            "Frame %d: score %.3f, max %.3f at frame %d",
            frame_number, score, self._tracker.max_score, self._tracker.max_frame_number,
        )

        # The next frame compares against this one even if OCR below is cancelled
        identical = frames_identical(self._previous_hash, capture.image_hash)
        self._previous_image = capture.image
        self._previous_hash = capture.image_hash

        ocr = await self._run_ocr(capture, identical)
        new_lines: list[LineRecord] = []
        if ocr is not None:
            new_lines = new_lines_since(ocr.lines, self._previous_lines)
            if cfg.output.save_text_files:
                save_text_files(
                    frame_number,
                    new_lines,
                    ocr.lines,
                    self._previous_lines,
                    base_dir=cfg.output.text_dir,
                )
            self._previous_lines = ocr.lines

        return FrameReport(
            frame_number=frame_number,
            capture=capture,
            score=score,
            compared=compared,
            max_frame=max_frame,
            ocr=ocr,
            new_lines=new_lines,
        )

    def _score(self, capture: CaptureResult, frame_number: int) -> tuple[float, bool]:
        if self._previous_image is None:
            return 0.0, False
        sim = self._settings.similarity
        try:
            score = compare_with_previous(
                self._previous_image,
                capture.image,
                frame_number,
                window=sim.ssim_window,
                sigma=sim.ssim_sigma,
            )
        except DimensionMismatch as e:
            logger.warning("Frame %d: skipping comparison: %s", frame_number, e)
            return 0.0, False
        return score, True

    async def _run_ocr(self, capture: CaptureResult, identical: bool) -> OcrResult | None:
        if self._ocr is None or not self._settings.ocr.enabled:
            return None
        if self._settings.similarity.skip_identical and identical:
            logger.debug("Frame identical to previous, skipping OCR")
            return None
        try:
            return await self._ocr.perform_ocr_async(capture.image)
        except OcrError as e:
            logger.error("OCR failed: %s", e)
            return None
