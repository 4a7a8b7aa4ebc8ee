"""
Extraction controller implementation.

Drives a single ThemeReference through fetch, extract and root resolution.
"""

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from remotetheme.remotetheme_config import RemoteThemeConfig
from remotetheme.remotetheme_exceptions import PathResolutionError
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_downloader.extractor import ArchiveExtractor, create_extractor
from remotetheme.theme_downloader.fetcher import ArchiveFetcher
from remotetheme.theme_models import ThemeReference


class ExtractionState(str, Enum):
    """States a theme passes through while being materialized."""

    IDLE = "idle"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    RESOLVING_ROOT = "resolving_root"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass
class DownloadSession:
    """
    Temporary files owned by one run.

    ``extract_dir`` is canonical (symlinks resolved) and is left in place for
    the consumers of the theme once a run succeeds. ``archive_path`` is removed
    after extraction. A failed run discards both.
    """

    archive_path: str
    extract_dir: str

    @classmethod
    def create(cls, prefix: str) -> "DownloadSession":
        fd, archive_path = tempfile.mkstemp(prefix=prefix, suffix=".zip")
        os.close(fd)
        extract_dir = os.path.realpath(tempfile.mkdtemp(prefix=prefix))
        return cls(archive_path=archive_path, extract_dir=extract_dir)

    def discard_archive(self) -> None:
        if os.path.exists(self.archive_path):
            os.remove(self.archive_path)

    def discard(self) -> None:
        self.discard_archive()
        shutil.rmtree(self.extract_dir, ignore_errors=True)


class ExtractionController:
    """
    Downloads, extracts and locates the root of a remote theme.

    ``run()`` is a no-op once the theme has been materialized, either by this
    controller or because the theme's ``root`` already holds content.

    Example usage:
    ```python
    theme = ThemeReference.parse("acme/site-theme@v2.0")
    controller = ExtractionController.create(theme, RemoteThemeConfig(), RemoteThemeLogger())
    controller.run()
    print(theme.root)
    ```
    """

    def __init__(
        self,
        theme: ThemeReference,
        fetcher: ArchiveFetcher,
        extractor: ArchiveExtractor,
        logger: RemoteThemeLogger,
        temp_prefix: str = "remote-theme-",
    ):
        self.theme = theme
        self.fetcher = fetcher
        self.extractor = extractor
        self.logger = logger
        self.temp_prefix = temp_prefix
        self.state = ExtractionState.IDLE
        self.error: Optional[Exception] = None
        self.session: Optional[DownloadSession] = None

    @classmethod
    def create(
        cls,
        theme: ThemeReference,
        config: RemoteThemeConfig,
        logger: RemoteThemeLogger,
    ) -> "ExtractionController":
        """Build a controller with the fetcher and extractor described by ``config``."""
        return cls(
            theme,
            ArchiveFetcher(config, logger),
            create_extractor(config, logger),
            logger,
            temp_prefix=config.temp_prefix,
        )

    def is_complete(self) -> bool:
        """
        Whether the theme is already materialized.

        The filesystem is only consulted until the first successful check;
        after that the COMPLETE state answers.
        """
        if self.state == ExtractionState.COMPLETE:
            return True
        if self.theme.has_populated_root():
            self.state = ExtractionState.COMPLETE
            return True
        return False

    def run(self) -> None:
        """
        Materialize the theme and set its root.

        Raises:
            DownloadError: If the archive could not be downloaded
            ExecutionError: If extraction failed
            PathResolutionError: If the archive did not unpack to a single directory
        """
        if self.is_complete():
            self.logger.log(
                f"Using existing {self.theme.name_with_owner}", logging.DEBUG
            )
            return

        self.error = None
        session = DownloadSession.create(self.temp_prefix)
        self.session = session

        try:
            self._transition(ExtractionState.FETCHING)
            self.fetcher.fetch(self.theme, session.archive_path)

            self._transition(ExtractionState.EXTRACTING)
            self.logger.log(
                f"Unzipping {session.archive_path} to {session.extract_dir}",
                logging.DEBUG,
            )
            self.extractor.extract(session.archive_path, session.extract_dir)
            session.discard_archive()

            self._transition(ExtractionState.RESOLVING_ROOT)
            root = self.resolve_root(session.extract_dir)
            self.theme.set_root(root)
            self.logger.log(f"Setting theme root to {root}", logging.DEBUG)
        except Exception as e:
            self.state = ExtractionState.FAILED
            self.error = e
            session.discard()
            self.logger.log(
                f"Failed to materialize {self.theme.name_with_owner}: {e}",
                logging.ERROR,
            )
            raise

        self._transition(ExtractionState.COMPLETE)

    @staticmethod
    def resolve_root(extract_dir: str) -> str:
        """
        Return the single top-level directory inside ``extract_dir``.

        Archives from the download endpoint unpack to ``<name>-<ref>/`` using
        the repository's real casing, which cannot be known before
        extraction. The on-disk name is used as is.

        Raises:
            PathResolutionError: If there is not exactly one non-empty directory
        """
        entries = sorted(os.listdir(extract_dir))
        if not entries:
            raise PathResolutionError(f"Extraction directory {extract_dir} is empty")
        if len(entries) > 1:
            raise PathResolutionError(
                f"Expected a single top-level directory in {extract_dir}, "
                f"found {len(entries)} entries: {', '.join(entries)}"
            )

        root = os.path.join(extract_dir, entries[0])
        if not os.path.isdir(root):
            raise PathResolutionError(
                f"Top-level entry {entries[0]} in {extract_dir} is not a directory"
            )
        if not os.listdir(root):
            raise PathResolutionError(f"Theme directory {root} is empty")
        return root

    def _transition(self, state: ExtractionState) -> None:
        self.logger.log(
            f"{self.theme.name_with_owner}: {self.state.value} -> {state.value}",
            logging.DEBUG,
        )
        self.state = state
