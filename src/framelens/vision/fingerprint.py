"""Content fingerprint for captured frames.

A fingerprint is a cheap 64-bit identity signal for a frame's raw bytes.
Equal fingerprints gate an optional fast path only; they are not proof
of identical content.
"""

from __future__ import annotations

import hashlib

import numpy as np


def calculate_hash(image: np.ndarray) -> int:
    """Return a deterministic unsigned 64-bit hash of an image's pixel bytes.

    The shape is mixed in so that equal byte buffers with different
    geometry do not share a fingerprint.
    """
    hasher = hashlib.blake2b(digest_size=8)
    hasher.update(repr(image.shape).encode("ascii"))
    hasher.update(np.ascontiguousarray(image).data)
    return int.from_bytes(hasher.digest(), "big")


def frames_identical(first_hash: int | None, second_hash: int | None) -> bool:
    """Whether two fingerprints match (a missing fingerprint never matches)."""
    return first_hash is not None and first_hash == second_hash
