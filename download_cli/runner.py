from __future__ import annotations

import httpx
import typer

from download_cli.config import PROG_NAME, DownloadConfig
from download_cli.downloader import run
from download_cli.errors import EXIT_INTERRUPTED, EXIT_OK, DownloadError
from download_cli.models import DownloadResult


def _build_report(result: DownloadResult) -> list[str]:
    return [
        f"sha1({result.path}) = {result.sha1}",
        f"sha256({result.path}) = {result.sha256}",
    ]


def run_sync(config: DownloadConfig, *, transport: httpx.BaseTransport | None = None) -> int:
    """Run one download and translate its outcome into an exit status.

    Exit code policy:
    - EXIT_OK: body fully written.
    - DownloadError.exit_code: see download_cli.errors.
    - EXIT_INTERRUPTED: Ctrl-C; file and connection are already closed.
    """
    try:
        result = run(config, transport=transport)
    except DownloadError as exc:
        typer.echo(f"{PROG_NAME}: {exc}", err=True)
        return exc.exit_code
    except KeyboardInterrupt:
        typer.echo(f"{PROG_NAME}: interrupted", err=True)
        return EXIT_INTERRUPTED

    if not config.quiet:
        for line in _build_report(result):
            typer.echo(line, err=config.to_stdout)
    return EXIT_OK
