"""framelens -- Screen frame change detection and OCR line reconstruction.

This package implements the per-frame decision stage of a continuous
screen capture pipeline: fingerprint each frame, measure perceptual
change against the previous one, track the most changed frame, and
turn word-level OCR output into line-grouped text records.
"""

__version__ = "0.1.0"
