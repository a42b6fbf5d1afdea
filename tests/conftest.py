# tests/conftest.py
"""
Shared pytest fixtures for download_cli tests.
"""

import httpx
import pytest

from download_cli import downloader, http_utils


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    # setenv first so teardown also removes a value loaded from a .env file
    monkeypatch.setenv("DOWNLOAD_TIMEOUT", "")
    monkeypatch.delenv("DOWNLOAD_TIMEOUT")
    return tmp_path


@pytest.fixture
def serve(monkeypatch):
    """Route every client the downloader builds through an httpx.MockTransport.

    Returns an installer taking a request handler; the installer returns the
    list of requests the handler has seen.
    """

    def install(handler):
        seen = []

        def recording(request):
            seen.append(request)
            return handler(request)

        mock_transport = httpx.MockTransport(recording)
        real_build_client = http_utils.build_client

        def build_client(config, *, transport=None):
            return real_build_client(config, transport=mock_transport)

        monkeypatch.setattr(downloader, "build_client", build_client)
        return seen

    return install


@pytest.fixture
def no_network(monkeypatch):
    """Fail the test if the downloader tries to build an HTTP client."""

    def build_client(config, *, transport=None):
        raise AssertionError("network access attempted")

    monkeypatch.setattr(downloader, "build_client", build_client)
