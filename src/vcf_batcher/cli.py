"""Typer-based CLI entry point for vcf-batcher."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from rich.progress import Progress

from .config import resolve_config
from .errors import VcfBatcherError
from .pipeline import SavedBatch, extract_variants_to_batches
from .rich_console import PROGRESS_COLUMNS, console

LOGGER = logging.getLogger("vcf_batcher.cli")

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Cut VCF (variant call format) files into smaller batches, "
        "for multiprocessing or distributed computing."
    ),
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def batch(
    input_path: Path = typer.Argument(..., help="The VCF file to read (.vcf or bgzipped .vcf.gz)."),
    output_path: Path = typer.Argument(..., help="The directory to write the batches into."),
    batch_size: Optional[int] = typer.Option(
        None,
        "--batch-size",
        "-b",
        min=1,
        help="Data lines per batch, excluding the header (default: 25000).",
    ),
    compression_level: Optional[str] = typer.Option(
        None,
        "--compression-level",
        "-c",
        help="BGZF compression level: fast, default, best or none.",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Optional YAML file providing batch_size and compression_level.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Split INPUT_PATH into batch_NN.vcf files inside OUTPUT_PATH."""
    _setup_logging(verbose)
    start = time.perf_counter()

    try:
        cfg = resolve_config(
            config_path=config_path,
            batch_size=batch_size,
            compression_level=compression_level,
        )
        with Progress(*PROGRESS_COLUMNS, console=console, transient=True) as progress:
            task_id = progress.add_task(f"Batching {input_path.name}", total=None)

            def _report(saved: SavedBatch) -> None:
                progress.console.print(f"Saving {saved.path.name}", markup=False)
                progress.advance(task_id)

            summary = extract_variants_to_batches(
                input_path,
                cfg.batch_size,
                output_path,
                cfg.compression_level,
                on_batch=_report,
            )
    except VcfBatcherError as exc:
        LOGGER.debug("Batching failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    console.print(
        f"Saved {summary.batches_written} batches with {summary.batch_size} samples "
        f"to {summary.output_dir}.",
        markup=False,
    )
    if summary.skipped_lines:
        console.print(
            f"Skipped {summary.skipped_lines} lines that were not valid UTF-8.",
            style="yellow",
            markup=False,
        )
    elapsed = time.perf_counter() - start
    console.print(
        f"Extracted variants into batches of size {summary.batch_size} in: {elapsed:.3f} seconds",
        markup=False,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
