"""Shared Rich console and progress layout for the command line."""

from rich.console import Console
from rich.progress import SpinnerColumn, TextColumn, TimeElapsedColumn

# Single shared console to keep the progress line and batch messages aligned.
console: Console = Console()

PROGRESS_COLUMNS = (
    SpinnerColumn(),
    TextColumn("[progress.description]{task.description}"),
    TextColumn("{task.completed} batches"),
    TimeElapsedColumn(),
)
