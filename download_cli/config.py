from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

import httpx

from download_cli.errors import UrlError, UsageError

PROG_NAME = "download"
VERSION = "0.3.0"

DEFAULT_USER_AGENT = f"{PROG_NAME}/{VERSION}"
DEFAULT_OUTPUT_NAME = "index.html"
DEFAULT_MAX_REDIRECTS = 0
DEFAULT_TIMEOUT_SECONDS = 25.0

# `-o -` streams the body to stdout instead of a file.
STDOUT_MARKER = "-"

ALLOWED_SCHEMES = {"http", "https"}

# Header values go out as ASCII; tabs and other controls are refused too.
_USER_AGENT_RE = re.compile(r"[\x20-\x7e]*")


def _timeout_from_env() -> float:
    raw = os.getenv("DOWNLOAD_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class DownloadConfig:
    url: str
    output_path: str | None = None
    use_remote_name: bool = False
    user_agent: str | None = None

    max_redirects: int = DEFAULT_MAX_REDIRECTS
    verbose: bool = False
    quiet: bool = False  # no progress bar, no digest report

    timeout: float = field(default_factory=_timeout_from_env)

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent if self.user_agent is not None else DEFAULT_USER_AGENT

    @property
    def to_stdout(self) -> bool:
        return self.output_path == STDOUT_MARKER


def validate_url(url: str) -> str:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise UrlError(url, str(exc)) from exc

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise UrlError(url, "expected an absolute http or https URL")
    if not parsed.host:
        raise UrlError(url, "missing host")
    return url


def validate_user_agent(user_agent: str | None) -> str | None:
    if user_agent is not None and not _USER_AGENT_RE.fullmatch(user_agent):
        raise UsageError(f"invalid user-agent {user_agent!r}: only printable ASCII is allowed")
    return user_agent


def resolve_config(
    url: str,
    *,
    output: str | None = None,
    remote_name: bool = False,
    user_agent: str | None = None,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    verbose: bool = False,
    quiet: bool = False,
) -> DownloadConfig:
    """Validate parsed command-line values and freeze them into a DownloadConfig.

    `-o` and `-O` may both be given; `-o` takes precedence when the output
    path is resolved.
    """

    return DownloadConfig(
        url=validate_url(url),
        output_path=output,
        use_remote_name=remote_name,
        user_agent=validate_user_agent(user_agent),
        max_redirects=max(0, int(max_redirects)),
        verbose=verbose,
        quiet=quiet,
    )
