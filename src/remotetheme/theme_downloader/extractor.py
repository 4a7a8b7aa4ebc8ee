"""
Archive extraction backends.

The controller only needs ``extract(archive_path, dest_dir)``; tests can
pass any object with that method.
"""

import logging
import shutil
from typing import Protocol, Sequence

from remotetheme.remotetheme_config import EXTRACTOR_BUILTIN, RemoteThemeConfig
from remotetheme.remotetheme_exceptions import ExecutionError, ExecutionErrorKind
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_downloader.executor import CommandExecutor


class ArchiveExtractor(Protocol):
    def extract(self, archive_path: str, dest_dir: str) -> None:
        ...


class UnzipExtractor:
    """Extracts with an external ``unzip`` executable."""

    def __init__(self, executor: CommandExecutor, unzip_command: Sequence[str] = ("unzip",)):
        self.executor = executor
        self.unzip_command = list(unzip_command)

    def extract(self, archive_path: str, dest_dir: str) -> None:
        self.executor.run_command(*self.unzip_command, archive_path, "-d", dest_dir)


class ShutilExtractor:
    """Extracts in-process with :func:`shutil.unpack_archive`."""

    def __init__(self, logger: RemoteThemeLogger, archive_format: str = "zip"):
        self.logger = logger
        self.archive_format = archive_format

    def extract(self, archive_path: str, dest_dir: str) -> None:
        self.logger.log(
            f"Unpacking {archive_path} as {self.archive_format}", logging.DEBUG
        )
        try:
            shutil.unpack_archive(archive_path, dest_dir, self.archive_format)
        except (shutil.ReadError, ValueError, OSError) as e:
            raise ExecutionError(
                ExecutionErrorKind.NON_ZERO_EXIT,
                ["unpack_archive", archive_path, dest_dir],
                exit_code=1,
                stderr=str(e),
            ) from e


def create_extractor(config: RemoteThemeConfig, logger: RemoteThemeLogger) -> ArchiveExtractor:
    """Build the extractor selected by ``config.extractor``."""
    if config.extractor == EXTRACTOR_BUILTIN:
        return ShutilExtractor(logger)
    executor = CommandExecutor(
        logger,
        timeout_command=config.timeout_command,
        timeout=config.extraction_timeout,
    )
    return UnzipExtractor(executor, config.unzip_command)
