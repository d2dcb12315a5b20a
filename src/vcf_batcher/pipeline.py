"""Single-pass driver: input file -> batches -> output files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .batch import BatchAccumulator, iter_batches
from .compression import CompressionLevel, parse_compression_level
from .lines import open_line_source
from .writer import save_batch

__all__ = [
    "SavedBatch",
    "BatchRunSummary",
    "extract_variants_to_batches",
    "py_extract_variants_to_batches",
]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SavedBatch:
    number: int
    path: Path
    data_lines: int
    partial: bool


@dataclass
class BatchRunSummary:
    batch_size: int
    output_dir: Path
    compression: CompressionLevel | None
    batches_written: int = 0
    data_lines: int = 0
    header_lines: int = 0
    skipped_lines: int = 0
    files: list[Path] = field(default_factory=list)


def extract_variants_to_batches(
    file_path: str | Path,
    batch_size: int,
    output_path: str | Path,
    compression_level: CompressionLevel | str | None = None,
    *,
    on_batch: Callable[[SavedBatch], None] | None = None,
) -> BatchRunSummary:
    """
    Convert a large VCF file into smaller VCF files of ``batch_size`` records.

    Every output file repeats the header block. Files are named
    ``batch_01.vcf``, ``batch_02.vcf``, ... (``.vcf.gz`` when compressed) and
    written into ``output_path``, which is created if missing.

    ``compression_level`` may be a ``CompressionLevel`` or one of the names
    ``fast``, ``default`` or ``best``; anything else writes plain text.

    Raises a ``VcfBatcherError`` subclass on the first unrecoverable failure.
    Batches written before the failure are left in place.
    """
    output_dir = Path(output_path)
    compression = parse_compression_level(compression_level)
    accumulator = BatchAccumulator(batch_size)
    source = open_line_source(file_path)

    summary = BatchRunSummary(
        batch_size=accumulator.batch_size,
        output_dir=output_dir,
        compression=compression,
    )

    for batch in iter_batches(source, accumulator=accumulator):
        if batch.partial:
            LOGGER.info(
                "Saving final batch with less than %d samples (%d)",
                batch_size,
                batch.data_line_count,
            )
        path = save_batch(batch.render(), batch.number, output_dir, compression)
        LOGGER.debug("Saved %s", path.name)

        summary.batches_written += 1
        summary.files.append(path)
        if on_batch is not None:
            on_batch(
                SavedBatch(
                    number=batch.number,
                    path=path,
                    data_lines=batch.data_line_count,
                    partial=batch.partial,
                )
            )

    summary.data_lines = accumulator.data_lines
    summary.header_lines = accumulator.header_lines
    summary.skipped_lines = source.skipped_lines
    if source.skipped_lines:
        LOGGER.warning("Dropped %d undecodable lines from %s", source.skipped_lines, file_path)

    LOGGER.info(
        "Saved %d batches with %d samples to %s.",
        summary.batches_written,
        batch_size,
        output_dir,
    )
    return summary


def py_extract_variants_to_batches(
    file_path: str,
    output_path: str,
    batch_size: int,
    compression_level: str | None = None,
) -> None:
    """
    Converts a large VCF file into batches of smaller VCF files containing a fixed number of samples.

    Note the argument order: the output directory comes before the batch size.

    :param file_path: The VCF file to split into batches.
    :param output_path: The directory where the batches will be saved.
    :param batch_size: The number of samples to include in each batch.
    :param compression_level: "default", "fast" or "best"; anything else writes plain text.
    """
    extract_variants_to_batches(file_path, batch_size, output_path, compression_level)
