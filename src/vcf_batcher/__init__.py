"""Cut large VCF files into batches of smaller VCF files.

Each batch repeats the full header block and holds a fixed number of variant
records, optionally BGZF-compressed, so the pieces can be processed in
parallel or on separate machines.
"""

from .batch import Batch, BatchAccumulator, iter_batches
from .compression import CompressionLevel, parse_compression_level
from .errors import BatchWriteError, ConfigError, LineSourceError, VcfBatcherError
from .lines import is_header_line, open_line_source
from .pipeline import (
    BatchRunSummary,
    SavedBatch,
    extract_variants_to_batches,
    py_extract_variants_to_batches,
)
from .writer import batch_filename, save_batch

__version__ = "0.2.1"

__all__ = [
    "Batch",
    "BatchAccumulator",
    "BatchRunSummary",
    "BatchWriteError",
    "CompressionLevel",
    "ConfigError",
    "LineSourceError",
    "SavedBatch",
    "VcfBatcherError",
    "batch_filename",
    "extract_variants_to_batches",
    "is_header_line",
    "iter_batches",
    "open_line_source",
    "parse_compression_level",
    "py_extract_variants_to_batches",
    "save_batch",
]
