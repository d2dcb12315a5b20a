"""Grouping of VCF data lines into fixed-size batches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import ConfigError
from .lines import is_header_line

__all__ = ["Batch", "BatchAccumulator", "iter_batches", "validate_batch_size"]


def validate_batch_size(batch_size: int) -> int:
    if isinstance(batch_size, bool) or not isinstance(batch_size, int):
        raise ConfigError(f"batch_size must be an integer, got {batch_size!r}.")
    if batch_size < 1:
        raise ConfigError(f"batch_size must be at least 1, got {batch_size}.")
    return batch_size


@dataclass(frozen=True, slots=True)
class Batch:
    number: int
    header: str
    lines: tuple[str, ...]
    partial: bool = False

    @property
    def data_line_count(self) -> int:
        return len(self.lines)

    def render(self) -> str:
        """Header block followed by the data lines, each newline-terminated."""
        return self.header + "".join(f"{line}\n" for line in self.lines)


class BatchAccumulator:
    """
    Splits a stream of lines into header and data lines and cuts batches.

    Header lines are appended to an ever-growing header block and never count
    toward the batch size. Each emitted batch carries a snapshot of the header
    block as it stood when the batch was cut, so header lines that show up
    between data lines are carried into every later batch.
    """

    def __init__(self, batch_size: int) -> None:
        self.batch_size = validate_batch_size(batch_size)
        self._header: list[str] = []
        self._current: list[str] = []
        self.batch_count = 0
        self.data_lines = 0

    @property
    def header_lines(self) -> int:
        return len(self._header)

    @property
    def header(self) -> str:
        return "".join(self._header)

    @property
    def pending_lines(self) -> int:
        return len(self._current)

    def add(self, line: str) -> Batch | None:
        """Consume one line; return a batch when this line completes one."""
        if is_header_line(line):
            self._header.append(f"{line}\n")
            return None

        self._current.append(line)
        self.data_lines += 1
        if len(self._current) >= self.batch_size:
            return self._cut(partial=False)
        return None

    def finish(self) -> Batch | None:
        """Emit the trailing partial batch, if any data lines are left."""
        if not self._current:
            return None
        return self._cut(partial=True)

    def _cut(self, *, partial: bool) -> Batch:
        self.batch_count += 1
        batch = Batch(
            number=self.batch_count,
            header=self.header,
            lines=tuple(self._current),
            partial=partial,
        )
        self._current = []
        return batch


def iter_batches(
    lines: Iterable[str],
    batch_size: int | None = None,
    *,
    accumulator: BatchAccumulator | None = None,
) -> Iterator[Batch]:
    """
    Yield batches from ``lines`` in order, finishing with any partial batch.

    Pass either ``batch_size`` or a ready ``accumulator``, not both.
    """
    if (batch_size is None) == (accumulator is None):
        raise TypeError("iter_batches() takes exactly one of batch_size or accumulator.")
    acc = accumulator if accumulator is not None else BatchAccumulator(batch_size)
    for line in lines:
        batch = acc.add(line)
        if batch is not None:
            yield batch
    tail = acc.finish()
    if tail is not None:
        yield tail
