from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class DownloadResult:
    path: str
    bytes_written: int
    sha1: str
    sha256: str
    status_code: int = 200
