from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from download_cli.config import DEFAULT_OUTPUT_NAME, STDOUT_MARKER, DownloadConfig
from download_cli.errors import NoRemoteName


def remote_name(url: str) -> str:
    """Return the percent-decoded last path segment of `url`.

    Raises NoRemoteName when the path is empty or ends in "/", or when the
    decoded segment would escape the working directory.
    """

    path = urlparse(url).path
    if not path or path.endswith("/"):
        raise NoRemoteName(url)

    name = unquote(path.rsplit("/", 1)[-1])
    if not name or name in {".", ".."} or "/" in name or "\\" in name or "\x00" in name:
        raise NoRemoteName(url)
    return name


def resolve_output_path(config: DownloadConfig) -> Path:
    if config.output_path is not None:
        return Path(config.output_path)

    if config.use_remote_name:
        return Path(remote_name(config.url))

    try:
        return Path(remote_name(config.url))
    except NoRemoteName:
        return Path(DEFAULT_OUTPUT_NAME)


def is_stdout(path: Path) -> bool:
    return str(path) == STDOUT_MARKER
