"""Line reconstruction from word-level OCR tokens.

The backend emits a flat token stream in reading order. Rows with
``word_num == 0`` mark structure (a new line, paragraph, block or page);
real words carry increasing word numbers within their line. The scan is
a fold over the stream with an explicit accumulator, so no state leaks
between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Iterable

from framelens.domain.models import LineRecord, OcrToken


@dataclass(frozen=True)
class _PendingLine:
    text: str = ""
    confidence_sum: float = 0.0
    word_count: int = 0
    position: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.text

    def add(self, token: OcrToken) -> _PendingLine:
        # Empty words still count toward the confidence average
        text = self.text
        if token.text:
            text = f"{text} {token.text}" if text else token.text
        return _PendingLine(
            text=text,
            confidence_sum=self.confidence_sum + token.confidence,
            word_count=self.word_count + 1,
            position=self.position or (token.line_position if token.text else ""),
        )

    def finalize(self) -> LineRecord:
        # Non-empty text implies at least one counted word
        average = self.confidence_sum / self.word_count
        return LineRecord(
            text=self.text,
            confidence=f"{average:.2f}",
            line_position=self.position,
        )


@dataclass(frozen=True)
class _ScanState:
    lines: tuple[LineRecord, ...] = ()
    current: _PendingLine = field(default_factory=_PendingLine)
    last_word_num: int = 0

    def flush(self) -> _ScanState:
        # A line without text is kept open, its confidence carries into the next line
        if self.current.is_empty:
            return self
        return replace(self, lines=self.lines + (self.current.finalize(),), current=_PendingLine())


def _step(state: _ScanState, token: OcrToken) -> _ScanState:
    if token.is_line_marker:
        state = state.flush()
    # Non-increasing word numbers are treated as duplicates and skipped
    if token.word_num > state.last_word_num:
        state = replace(state, current=state.current.add(token))
    return replace(state, last_word_num=token.word_num)


def reconstruct_lines(tokens: Iterable[OcrToken]) -> list[LineRecord]:
    """Group word tokens into line records with averaged confidence.

    Args:
        tokens: Word-level OCR rows in the order the backend produced them.

    Returns:
        One LineRecord per non-empty line, in reading order. A stream
        without a trailing line marker still yields its last line.
    """
    final = reduce(_step, tokens, _ScanState()).flush()
    return list(final.lines)


def flatten_text(lines: Iterable[LineRecord]) -> str:
    """Join the non-empty line texts with single spaces."""
    return " ".join(line.text for line in lines if line.text)
