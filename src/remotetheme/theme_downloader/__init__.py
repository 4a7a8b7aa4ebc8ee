"""
Remote theme downloader.

This package handles:
1. Building archive URLs and streaming archives to disk
2. Running the external extraction command
3. Locating the extracted theme's root directory
4. Tracking each theme's progress through those steps
"""

from .controller import DownloadSession, ExtractionController, ExtractionState
from .executor import CommandExecutor
from .extractor import ArchiveExtractor, ShutilExtractor, UnzipExtractor, create_extractor
from .fetcher import ArchiveFetcher

__all__ = [
    "ArchiveExtractor",
    "ArchiveFetcher",
    "CommandExecutor",
    "DownloadSession",
    "ExtractionController",
    "ExtractionState",
    "ShutilExtractor",
    "UnzipExtractor",
    "create_extractor",
]
