from __future__ import annotations

import ssl

import httpx

from download_cli.config import DownloadConfig


def _tls_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def build_client(config: DownloadConfig, *, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Client for a single download.

    Redirects are only followed when --max-redirects is above zero; otherwise a
    3xx response surfaces as a status failure.
    """

    kwargs = {}
    if transport is not None:
        kwargs["transport"] = transport
    else:
        kwargs["verify"] = _tls_context()

    return httpx.Client(
        headers={"User-Agent": config.effective_user_agent},
        timeout=config.timeout,
        follow_redirects=config.max_redirects > 0,
        max_redirects=config.max_redirects,
        **kwargs,
    )


def content_length(response: httpx.Response) -> int | None:
    raw = response.headers.get("content-length")
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


def format_status_line(response: httpx.Response) -> str:
    return f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()


def format_headers(response: httpx.Response) -> list[str]:
    return [f"{key}: {value}" for key, value in response.headers.items()]
