"""Text-file output sink for framelens."""

from framelens.output.writer import save_text_files

__all__ = ["save_text_files"]
