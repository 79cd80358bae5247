"""Per-frame pipeline for framelens."""

from framelens.pipeline.frame import FramePipeline, new_lines_since

__all__ = ["FramePipeline", "new_lines_since"]
