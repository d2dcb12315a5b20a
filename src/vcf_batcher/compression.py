"""BGZF compression levels for batch output."""

from __future__ import annotations

import logging
from enum import Enum

LOGGER = logging.getLogger(__name__)

BGZF_SUFFIX = ".gz"


class CompressionLevel(str, Enum):
    FAST = "fast"
    DEFAULT = "default"
    BEST = "best"

    @property
    def zlib_level(self) -> int:
        return _ZLIB_LEVELS[self]


_ZLIB_LEVELS = {
    CompressionLevel.FAST: 1,
    CompressionLevel.DEFAULT: 6,
    CompressionLevel.BEST: 9,
}


def parse_compression_level(raw: str | CompressionLevel | None) -> CompressionLevel | None:
    """
    Map user input onto a compression level.

    Matching is case-insensitive. ``None``, ``"none"`` and any unrecognised
    name mean "do not compress"; unrecognised names are logged.
    """
    if raw is None or isinstance(raw, CompressionLevel):
        return raw
    text = raw.strip().lower()
    if not text or text == "none":
        return None
    try:
        return CompressionLevel(text)
    except ValueError:
        LOGGER.warning("Unknown compression level '%s'; writing uncompressed batches.", raw)
        return None
