from __future__ import annotations

import hashlib
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

import httpx
import typer

from download_cli.config import DownloadConfig
from download_cli.errors import DownloadConnectionError, HttpStatusError, OutputError
from download_cli.http_utils import build_client, content_length, format_headers, format_status_line
from download_cli.models import DownloadResult
from download_cli.paths import is_stdout, resolve_output_path
from download_cli.progress import TransferProgress

CHUNK_SIZE = 8192


@contextmanager
def open_output(path: Path) -> Iterator[BinaryIO]:
    """Scoped write handle for the download target; stdout is flushed, never closed."""

    if is_stdout(path):
        sys.stdout.flush()
        out = sys.stdout.buffer
        try:
            yield out
        finally:
            out.flush()
        return

    with path.open("wb") as fh:
        yield fh


class FileDownloader:
    def __init__(
        self,
        config: DownloadConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.transport = transport

    def run(self) -> DownloadResult:
        target = resolve_output_path(self.config)

        with build_client(self.config, transport=self.transport) as client:
            try:
                with client.stream("GET", self.config.url) as response:
                    if self.config.verbose:
                        self._echo_response(response)

                    if not response.is_success:
                        location = response.headers.get("location") if response.is_redirect else None
                        raise HttpStatusError(response.status_code, response.reason_phrase, location=location)

                    return self._save(response, target)
            except httpx.RequestError as exc:
                raise DownloadConnectionError(self.config.url, exc) from exc

    def _save(self, response: httpx.Response, target: Path) -> DownloadResult:
        sha1 = hashlib.sha1()
        sha256 = hashlib.sha256()
        written = 0

        try:
            with open_output(target) as out, TransferProgress(
                total=content_length(response),
                description=target.name or str(target),
                disable=self.config.quiet,
            ) as bar:
                for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                    out.write(chunk)
                    sha1.update(chunk)
                    sha256.update(chunk)
                    written += len(chunk)
                    bar.advance(len(chunk))
        except OSError as exc:
            # Covers open, write and the flush on close.
            raise OutputError(str(target), exc) from exc

        return DownloadResult(
            path=str(target),
            bytes_written=written,
            sha1=sha1.hexdigest(),
            sha256=sha256.hexdigest(),
            status_code=response.status_code,
        )

    def _echo_response(self, response: httpx.Response) -> None:
        # Keep stdout clean when the body itself is going there.
        err = self.config.to_stdout
        typer.echo(format_status_line(response), err=err)
        for line in format_headers(response):
            typer.echo(line, err=err)


def run(config: DownloadConfig, *, transport: httpx.BaseTransport | None = None) -> DownloadResult:
    return FileDownloader(config, transport=transport).run()
