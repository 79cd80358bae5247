"""Keyframe tracking over a monitoring window."""

from __future__ import annotations

import logging

from framelens.domain.models import MaxAverageFrame

logger = logging.getLogger(__name__)


class ChangeTracker:
    """Remembers the frame with the highest change score seen so far.

    The tracker owns both the max frame and the running max score.
    Observations must arrive in strictly increasing frame order; on an
    exact score tie the most recent frame wins.
    """

    def __init__(self) -> None:
        self._max_frame: MaxAverageFrame | None = None
        self._last_frame_number: int | None = None

    @property
    def max_frame(self) -> MaxAverageFrame | None:
        return self._max_frame

    @property
    def max_frame_number(self) -> int:
        """Ordinal of the current max frame, 0 when nothing was observed."""
        return self._max_frame.frame_number if self._max_frame else 0

    @property
    def max_score(self) -> float:
        return self._max_frame.score if self._max_frame else 0.0

    def observe(self, frame_number: int, score: float) -> MaxAverageFrame:
        """Record one frame's change score and return the current max frame.

        Raises:
            ValueError: If ``frame_number`` does not follow the previous one.
        """
        if self._last_frame_number is not None and frame_number <= self._last_frame_number:
            raise ValueError(
                f"Frame {frame_number} observed after frame {self._last_frame_number}"
            )
        self._last_frame_number = frame_number

        if self._max_frame is None or score >= self._max_frame.score:
            self._max_frame = MaxAverageFrame(frame_number=frame_number, score=score)
            logger.debug("New max change frame %d (score %.3f)", frame_number, score)
        return self._max_frame

    def reset(self) -> None:
        """Forget the tracked frame; the next observation starts a new window."""
        self._max_frame = None
        self._last_frame_number = None
