"""
Exceptions raised while resolving a remote theme.
"""

from enum import Enum
from typing import List, Optional, Sequence


class RemoteThemeException(Exception):
    """Base exception for all remote theme errors."""

    pass


class InvalidThemeError(RemoteThemeException):
    """Raised when a theme string cannot be parsed into a ThemeReference."""

    pass


class DownloadErrorKind(str, Enum):
    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"
    HTTP_STATUS = "http_status"


class DownloadError(RemoteThemeException):
    """
    Raised when the archive could not be downloaded.

    Attributes:
        kind: What went wrong (timeout, transport failure or HTTP status)
        code: HTTP status code, only set for HTTP_STATUS
        status_message: HTTP reason phrase, only set for HTTP_STATUS
        detail: Library level message for TRANSPORT_FAILURE
    """

    def __init__(
        self,
        kind: DownloadErrorKind,
        code: Optional[int] = None,
        status_message: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.kind = kind
        self.code = code
        self.status_message = status_message
        self.detail = detail
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind == DownloadErrorKind.TIMEOUT:
            return "Request timed out"
        if self.kind == DownloadErrorKind.HTTP_STATUS:
            return f"Request failed with {self.code} {self.status_message or ''}".rstrip()
        return self.detail or "Request failed"


class ExecutionErrorKind(str, Enum):
    NON_ZERO_EXIT = "non_zero_exit"
    TIMED_OUT = "timed_out"


class ExecutionError(RemoteThemeException):
    """
    Raised when an external command fails.

    Attributes:
        kind: NON_ZERO_EXIT or TIMED_OUT
        command: The argument vector that was run
        exit_code: Process exit code, None if the process was killed by us
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        kind: ExecutionErrorKind,
        command: Sequence[str],
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.kind = kind
        self.command: List[str] = list(command)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._describe())

    def _describe(self) -> str:
        cmd = " ".join(self.command)
        if self.kind == ExecutionErrorKind.TIMED_OUT:
            return f"Command timed out: {cmd}"
        message = f"Command exited with status {self.exit_code}: {cmd}"
        if self.stderr.strip():
            message += f"\n{self.stderr.strip()}"
        return message


class PathResolutionError(RemoteThemeException):
    """Raised when the extracted archive has no single top-level directory."""

    pass
