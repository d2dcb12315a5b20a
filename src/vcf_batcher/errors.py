from __future__ import annotations

from pathlib import Path

__all__ = ["VcfBatcherError", "ConfigError", "LineSourceError", "BatchWriteError"]


class VcfBatcherError(Exception):
    """Base class for every fatal error raised while batching a VCF file."""


class ConfigError(VcfBatcherError):
    """Raised when batch settings or the configuration file are invalid."""


class LineSourceError(VcfBatcherError):
    """Raised when the input file cannot be opened or its stream is corrupt."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class BatchWriteError(VcfBatcherError):
    """Raised when a batch cannot be persisted to the output directory."""

    def __init__(self, message: str, *, batch_number: int, path: Path | None = None) -> None:
        super().__init__(message)
        self.batch_number = batch_number
        self.path = path
