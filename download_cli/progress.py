"""
Rich progress bar for a single streaming transfer.

The bar renders on stderr so it never mixes with a body written to stdout.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)


class TransferProgress:
    """
    Byte-based progress bar.

    Example:
        >>> with TransferProgress(total=1024, description="file.bin") as bar:
        ...     bar.advance(512)
    """

    def __init__(
        self,
        total: int | None = None,
        description: str = "Downloading",
        disable: bool = False,
        console: Console | None = None,
    ) -> None:
        self.total = total
        self.description = description
        self.console = console or Console(stderr=True)
        # Only draw on an interactive stderr.
        self.disable = disable or not self.console.is_terminal
        self.completed = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def _create_progress(self) -> Progress:
        return Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            disable=self.disable,
        )

    def __enter__(self) -> "TransferProgress":
        self._progress = self._create_progress()
        self._progress.start()
        self._task_id = self._progress.add_task(escape(self.description), total=self.total)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def advance(self, amount: int) -> None:
        self.completed += amount
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, advance=amount)
