"""
Shared fixtures for remotetheme tests.
"""

import io
import tempfile
import time
import zipfile
from typing import Callable, Dict, List, Optional

import pytest

from remotetheme.remotetheme_config import RemoteThemeConfig
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_downloader import fetcher as fetcher_mod


class FakeResponse:
    """Stands in for a streamed requests.Response."""

    def __init__(self, status_code=200, reason="OK", body=b"", chunks=None, error=None, delay=0):
        self.status_code = status_code
        self.reason = reason
        self._chunks = chunks if chunks is not None else [body]
        self._error = error
        self._delay = delay
        self.body_read = False
        self.closed = False

    def iter_content(self, chunk_size=1):
        self.body_read = True
        for chunk in self._chunks:
            if self._delay:
                time.sleep(self._delay)
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self):
        self.closed = True


def build_zip(entries: Dict[str, str]) -> bytes:
    """Return the bytes of a zip archive holding ``entries`` (path -> text)."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for path, content in entries.items():
            archive.writestr(path, content)
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path, monkeypatch):
    """Keep downloads and extraction directories inside the test's tmp_path."""
    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_root))
    monkeypatch.delenv("REMOTE_THEME_TIMEOUT", raising=False)
    return temp_root


@pytest.fixture
def logger():
    return RemoteThemeLogger()


@pytest.fixture
def builtin_config():
    return RemoteThemeConfig(extractor="builtin")


@pytest.fixture
def zip_bytes() -> Callable[[Dict[str, str]], bytes]:
    return build_zip


@pytest.fixture
def fake_http(monkeypatch):
    """
    Replace requests.get in the fetcher module.

    Call the fixture with a response, an exception, or a callable mapping
    the URL to a response. Returns the list of recorded calls.
    """
    calls: List[dict] = []

    def install(response=None, exc: Optional[BaseException] = None, by_url=None):
        def fake_get(url, headers=None, stream=False, timeout=None):
            calls.append(
                {"url": url, "headers": headers, "stream": stream, "timeout": timeout}
            )
            if exc is not None:
                raise exc
            if by_url is not None:
                return by_url(url)
            return response

        monkeypatch.setattr(fetcher_mod.requests, "get", fake_get)
        return calls

    return install
