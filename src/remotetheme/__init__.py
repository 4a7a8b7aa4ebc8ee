"""
remotetheme resolves ``owner/name@ref`` theme references into local
directories by downloading and extracting the repository archive.
"""

from remotetheme.remotetheme_config import VERSION, RemoteThemeConfig
from remotetheme.remotetheme_exceptions import (
    DownloadError,
    DownloadErrorKind,
    ExecutionError,
    ExecutionErrorKind,
    InvalidThemeError,
    PathResolutionError,
    RemoteThemeException,
)
from remotetheme.remotetheme_logger import LOG_KEY, RemoteThemeLogger
from remotetheme.theme_downloader import ExtractionController, ExtractionState
from remotetheme.theme_models import ThemeReference
from remotetheme.theme_resolver import ThemeResolver

__version__ = VERSION

__all__ = [
    "DownloadError",
    "DownloadErrorKind",
    "ExecutionError",
    "ExecutionErrorKind",
    "ExtractionController",
    "ExtractionState",
    "InvalidThemeError",
    "LOG_KEY",
    "PathResolutionError",
    "RemoteThemeConfig",
    "RemoteThemeException",
    "RemoteThemeLogger",
    "ThemeReference",
    "ThemeResolver",
]
