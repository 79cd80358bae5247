"""Plain-text output of OCR lines per frame.

For frame ``n`` the sink writes ``new_text_n.txt``, ``current_text_n.txt``
and, when a previous frame exists, ``previous_text_n.txt``; one line per
LineRecord. Write failures are logged and only abort the affected file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from framelens.domain.models import LineRecord

logger = logging.getLogger(__name__)

DEFAULT_TEXT_DIR = Path("text_json")


def _write_lines(path: Path, lines: Sequence[LineRecord]) -> bool:
    try:
        with open(path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(f"{line.text}\n")
    except OSError as e:
        logger.error("Failed to write text file %s: %s", path, e)
        return False
    return True


def save_text_files(
    frame_number: int,
    new_lines: Sequence[LineRecord],
    current_lines: Sequence[LineRecord],
    previous_lines: Sequence[LineRecord] | None = None,
    base_dir: Path | str = DEFAULT_TEXT_DIR,
) -> list[Path]:
    """Write the new, current and previous OCR lines of one frame.

    Returns:
        The paths that were written successfully.
    """
    logger.debug("Saving text files for frame %d", frame_number)
    base_path = Path(base_dir)
    try:
        base_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed to create %s directory: %s", base_path, e)
        return []

    categories: list[tuple[str, Sequence[LineRecord]]] = [
        ("new_text", new_lines),
        ("current_text", current_lines),
    ]
    if previous_lines is not None:
        categories.append(("previous_text", previous_lines))

    written: list[Path] = []
    for prefix, lines in categories:
        path = base_path / f"{prefix}_{frame_number}.txt"
        if _write_lines(path, lines):
            written.append(path)
    return written
