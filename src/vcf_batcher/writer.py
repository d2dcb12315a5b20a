"""Persist batches as standalone VCF files."""

from __future__ import annotations

import io
import zlib
from pathlib import Path

from Bio import bgzf

from .compression import BGZF_SUFFIX, CompressionLevel
from .errors import BatchWriteError

__all__ = ["batch_filename", "compress_bgzf", "save_batch"]


class _RetainingBuffer(io.BytesIO):
    """BytesIO that keeps its payload after ``close()``.

    BgzfWriter closes its handle as the last step of writing the EOF block.
    """

    payload = b""

    def close(self) -> None:
        if not self.closed:
            self.payload = self.getvalue()
        super().close()


def batch_filename(batch_number: int, compression: CompressionLevel | None = None) -> str:
    if batch_number < 1:
        raise BatchWriteError(
            f"Batch numbers start at 1, got {batch_number}.", batch_number=batch_number
        )
    name = f"batch_{batch_number:02d}.vcf"
    if compression is not None:
        name += BGZF_SUFFIX
    return name


def compress_bgzf(data: bytes, level: CompressionLevel) -> bytes:
    """Encode ``data`` as a complete BGZF stream, EOF marker included."""
    buffer = _RetainingBuffer()
    writer = bgzf.BgzfWriter(fileobj=buffer, compresslevel=level.zlib_level)
    writer.write(data)
    writer.close()
    return buffer.payload


def save_batch(
    contents: str,
    batch_number: int,
    output_dir: Path,
    compression: CompressionLevel | None = None,
) -> Path:
    """
    Write one batch to ``output_dir`` and return the path written.

    The directory is created (with parents) if needed. Compressed batches are
    encoded in memory first and written with a single call, so every output
    file is independent of the others.
    """
    target = output_dir / batch_filename(batch_number, compression)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BatchWriteError(
            f"Unable to create output directory {output_dir}: {exc}",
            batch_number=batch_number,
            path=target,
        ) from exc

    payload = contents.encode("utf-8")
    if compression is not None:
        try:
            payload = compress_bgzf(payload, compression)
        except (zlib.error, ValueError) as exc:
            raise BatchWriteError(
                f"Unable to compress batch {batch_number}: {exc}",
                batch_number=batch_number,
                path=target,
            ) from exc

    try:
        with target.open("wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise BatchWriteError(
            f"An error occurred while trying to save batch {batch_number} to {target}: {exc}",
            batch_number=batch_number,
            path=target,
        ) from exc
    return target
