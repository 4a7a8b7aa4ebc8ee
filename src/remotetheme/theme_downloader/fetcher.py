"""
Archive fetcher implementation.

Streams a theme's archive from the download endpoint into a local file.
The response status is inspected before any body bytes are written.
"""

import logging
import time
from typing import Iterator, Optional

import requests
import urllib3

from remotetheme.remotetheme_config import RemoteThemeConfig
from remotetheme.remotetheme_exceptions import DownloadError, DownloadErrorKind
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_models import DEFAULT_HOST, ResponseKind, ResponseStatus, ThemeReference


class ArchiveStream:
    """
    An archive response whose headers have been received but whose body has
    not been read yet.
    """

    def __init__(
        self,
        status: ResponseStatus,
        response: Optional[requests.Response] = None,
    ):
        self.status = status
        self._response = response

    def iter_chunks(
        self, chunk_size: int, deadline: Optional[float] = None
    ) -> Iterator[bytes]:
        """
        Yield the body in chunks. Errors raised mid-transfer are translated
        into DownloadError. Once ``deadline`` (a ``time.monotonic()`` value)
        has passed, the transfer is abandoned as a timeout.
        """
        if self._response is None:
            return
        try:
            for chunk in self._response.iter_content(chunk_size=chunk_size):
                if deadline is not None and time.monotonic() > deadline:
                    raise DownloadError(DownloadErrorKind.TIMEOUT)
                if chunk:
                    yield chunk
        except requests.exceptions.Timeout as e:
            raise DownloadError(DownloadErrorKind.TIMEOUT) from e
        except requests.exceptions.ConnectionError as e:
            # requests wraps urllib3 read timeouts raised while streaming
            if e.args and isinstance(e.args[0], urllib3.exceptions.ReadTimeoutError):
                raise DownloadError(DownloadErrorKind.TIMEOUT) from e
            raise DownloadError(DownloadErrorKind.TRANSPORT_FAILURE, detail=str(e)) from e
        except requests.exceptions.RequestException as e:
            raise DownloadError(DownloadErrorKind.TRANSPORT_FAILURE, detail=str(e)) from e

    def close(self) -> None:
        if self._response is not None:
            self._response.close()


def open_archive_stream(url: str, user_agent: str, timeout: float) -> ArchiveStream:
    """
    Issue the GET request and return as soon as the headers are in.

    Never raises for network problems; the failure is described by the
    returned stream's ``status`` instead.
    """
    try:
        response = requests.get(
            url,
            headers={"User-Agent": user_agent},
            stream=True,
            timeout=timeout,
        )
    except requests.exceptions.Timeout as e:
        return ArchiveStream(ResponseStatus(kind=ResponseKind.TIMEOUT, message=str(e)))
    except requests.exceptions.RequestException as e:
        return ArchiveStream(
            ResponseStatus(kind=ResponseKind.TRANSPORT_FAILURE, message=str(e))
        )

    status = ResponseStatus.from_http(response.status_code or 0, response.reason)
    return ArchiveStream(status, response)


class ArchiveFetcher:
    """
    Downloads theme archives.

    Builds the download URL for a ThemeReference and writes the archive to a
    local file, raising DownloadError on timeouts, transport failures and
    non-200 responses.
    """

    def __init__(self, config: RemoteThemeConfig, logger: RemoteThemeLogger):
        """
        Initialize the archive fetcher.

        Args:
            config: Provides host, timeout, user agent and chunk size
            logger: Logger for progress messages
        """
        self.config = config
        self.logger = logger

    def archive_host(self, theme: ThemeReference) -> str:
        if theme.host == DEFAULT_HOST:
            return self.config.host
        return f"https://codeload.{theme.host}"

    def archive_url(self, theme: ThemeReference) -> str:
        return theme.archive_url(self.archive_host(theme), self.config.archive_marker)

    def fetch(self, theme: ThemeReference, destination: str) -> None:
        """
        Download the archive for ``theme`` into ``destination``.

        The file is opened only once the response is known to be a 200. A
        failure after some bytes were written still raises, and the caller
        must not use the partial file.

        Raises:
            DownloadError: If the download did not complete
        """
        url = self.archive_url(theme)
        deadline = None
        if self.config.download_timeout is not None:
            deadline = time.monotonic() + self.config.download_timeout
        self.logger.log(f"Downloading {url} to {destination}", logging.DEBUG)

        stream = open_archive_stream(
            url, self.config.user_agent, self.config.network_timeout
        )
        try:
            self.raise_if_unsuccessful(stream.status)
            written = 0
            with open(destination, "wb") as archive_file:
                for chunk in stream.iter_chunks(self.config.chunk_size, deadline):
                    archive_file.write(chunk)
                    written += len(chunk)
        finally:
            stream.close()

        self.logger.log(
            f"Downloaded {written} bytes for {theme.name_with_owner}", logging.DEBUG
        )

    @staticmethod
    def raise_if_unsuccessful(status: ResponseStatus) -> None:
        """
        Raises:
            DownloadError: Unless ``status`` describes a 200 response
        """
        if status.kind == ResponseKind.TIMEOUT:
            raise DownloadError(DownloadErrorKind.TIMEOUT)
        if status.kind == ResponseKind.TRANSPORT_FAILURE or status.code == 0:
            raise DownloadError(
                DownloadErrorKind.TRANSPORT_FAILURE, detail=status.message
            )
        if status.code != 200:
            raise DownloadError(
                DownloadErrorKind.HTTP_STATUS,
                code=status.code,
                status_message=status.message,
            )
