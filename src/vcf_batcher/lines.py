"""Line-level reading of plain and BGZF-compressed VCF files."""

from __future__ import annotations

import logging
import struct
import zlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Iterator

from Bio import bgzf

from .compression import BGZF_SUFFIX
from .errors import LineSourceError

__all__ = [
    "HEADER_MARKER",
    "LineSource",
    "PlainLineSource",
    "BgzfLineSource",
    "is_header_line",
    "open_line_source",
]

LOGGER = logging.getLogger(__name__)

HEADER_MARKER = "#"

# Errors a reader can raise on a missing, truncated or corrupt stream; none of
# them can be skipped past, so they end the run. Bio.bgzf raises RuntimeError on
# CRC or size mismatches and struct.error on a block cut short.
_STREAM_ERRORS = (OSError, ValueError, EOFError, RuntimeError, struct.error, zlib.error)


def is_header_line(line: str) -> bool:
    """Return True when ``line`` is VCF metadata (its first character is ``#``)."""
    return line.startswith(HEADER_MARKER)


def _strip_line_ending(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


class LineSource(ABC):
    """
    Lazy sequence of text lines read from one file.

    Every call to ``iter()`` reopens the file and starts again from the first
    line. Lines are decoded as UTF-8 one at a time; a line that does not decode
    is dropped with a warning and counted in ``skipped_lines``.
    """

    compressed = False

    def __init__(self, path: Path, *, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding
        self.skipped_lines = 0

    @abstractmethod
    def _open(self) -> BinaryIO:
        """Return a binary handle that iterates over raw lines."""

    def check_readable(self) -> None:
        """Open and close the file once so unreadable inputs fail up front."""
        handle = self._open_checked()
        handle.close()

    def _open_checked(self) -> BinaryIO:
        if self.path.is_dir():
            raise LineSourceError(f"Input path is a directory: {self.path}", path=self.path)
        try:
            return self._open()
        except FileNotFoundError as exc:
            raise LineSourceError(f"Input file not found: {self.path}", path=self.path) from exc
        except _STREAM_ERRORS as exc:
            raise LineSourceError(
                f"Unable to open {self.path}: {exc}. "
                "Is it either a .vcf or a bgzipped .vcf.gz file?",
                path=self.path,
            ) from exc

    def __iter__(self) -> Iterator[str]:
        self.skipped_lines = 0
        handle = self._open_checked()
        line_number = 0
        with handle:
            try:
                for raw in handle:
                    line_number += 1
                    try:
                        line = _strip_line_ending(raw).decode(self.encoding)
                    except UnicodeDecodeError as exc:
                        self.skipped_lines += 1
                        LOGGER.warning(
                            "Skipping line %d of %s: %s", line_number, self.path, exc.reason
                        )
                        continue
                    yield line
            except _STREAM_ERRORS as exc:
                raise LineSourceError(
                    f"Failed reading {self.path} after line {line_number}: {exc}",
                    path=self.path,
                ) from exc


class PlainLineSource(LineSource):
    def _open(self) -> BinaryIO:
        return self.path.open("rb")


class BgzfLineSource(LineSource):
    compressed = True

    def _open(self) -> BinaryIO:
        handle = self.path.open("rb")
        try:
            # BgzfReader decodes the first block eagerly, so a non-BGZF file fails here.
            return bgzf.BgzfReader(fileobj=handle, mode="rb")
        except Exception:
            handle.close()
            raise


def open_line_source(path: str | Path, *, encoding: str = "utf-8") -> LineSource:
    """
    Pick the reader for ``path`` by its suffix and check that it can be opened.

    Files ending in ``.gz`` are read as BGZF; everything else as plain text.
    Raises ``LineSourceError`` if the file is missing, unreadable or not valid
    BGZF.
    """
    path = Path(path)
    if path.name.endswith(BGZF_SUFFIX):
        LOGGER.info("Reading compressed file %s", path)
        source: LineSource = BgzfLineSource(path, encoding=encoding)
    else:
        LOGGER.info("Reading uncompressed file %s", path)
        source = PlainLineSource(path, encoding=encoding)
    source.check_readable()
    return source
