from __future__ import annotations

EXIT_OK = 0
EXIT_URL_FAILURE = 1
EXIT_USAGE = 2
EXIT_OUTPUT_FAILURE = 3
EXIT_INTERRUPTED = 130


class DownloadError(Exception):
    """Base class for every failure reported to the user.

    Each subclass carries the process exit status the command returns for it.
    """

    exit_code = EXIT_URL_FAILURE


class UsageError(DownloadError):
    exit_code = EXIT_USAGE


class UrlError(DownloadError):
    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"invalid URL {url!r}: {detail}")
        self.url = url
        self.detail = detail


class NoRemoteName(DownloadError):
    exit_code = EXIT_OUTPUT_FAILURE

    def __init__(self, url: str) -> None:
        super().__init__(f"cannot derive a file name from {url!r}; use -o/--output")
        self.url = url


class DownloadConnectionError(DownloadError):
    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"request to {url} failed: {type(cause).__name__}: {cause}")
        self.url = url
        self.cause = cause


class HttpStatusError(DownloadError):
    def __init__(self, status_code: int, reason: str = "", *, location: str | None = None) -> None:
        message = f"server responded with HTTP {status_code}"
        if reason:
            message += f" {reason}"
        if location:
            message += f" (redirect to {location}; raise --max-redirects to follow it)"
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason
        self.location = location


class OutputError(DownloadError):
    exit_code = EXIT_OUTPUT_FAILURE

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"cannot write {path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
