"""
Resolves theme strings or references to local directories, one at a time or
concurrently.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from remotetheme.remotetheme_config import RemoteThemeConfig
from remotetheme.remotetheme_logger import RemoteThemeLogger
from remotetheme.theme_downloader import ExtractionController
from remotetheme.theme_models import ThemeReference

ThemeLike = Union[str, ThemeReference]


class ThemeResolver:
    """
    Keeps one ExtractionController per archive so a theme requested several
    times is downloaded once.

    Example usage:
    ```python
    resolver = ThemeResolver(RemoteThemeConfig(), RemoteThemeLogger())
    theme = resolver.resolve("acme/site-theme@v2.0")

    themes = asyncio.run(resolver.resolve_all(["acme/a", "acme/b@main"]))
    ```
    """

    def __init__(
        self,
        config: Optional[RemoteThemeConfig] = None,
        logger: Optional[RemoteThemeLogger] = None,
    ):
        self.config = config or RemoteThemeConfig()
        self.logger = logger or RemoteThemeLogger()
        self._controllers: Dict[Tuple[str, str, str, str], ExtractionController] = {}

    def reference(self, theme: ThemeLike) -> ThemeReference:
        if isinstance(theme, ThemeReference):
            return theme
        return ThemeReference.parse(theme, self.config.allowed_hosts)

    def controller_for(self, theme: ThemeReference) -> ExtractionController:
        controller = self._controllers.get(theme.key)
        if controller is None:
            controller = ExtractionController.create(theme, self.config, self.logger)
            self._controllers[theme.key] = controller
        return controller

    def resolve(self, theme: ThemeLike) -> ThemeReference:
        """
        Materialize a theme and return a reference with its root set.

        Raises:
            InvalidThemeError: If ``theme`` is a malformed string
            DownloadError, ExecutionError, PathResolutionError: If resolution fails
        """
        reference = self.reference(theme)
        controller = self.controller_for(reference)
        controller.run()
        return self._share_root(reference, controller)

    async def resolve_all(self, themes: Sequence[ThemeLike]) -> List[ThemeReference]:
        """
        Materialize several themes concurrently.

        Each distinct archive runs in its own worker thread. The first failure
        is raised once every run has finished.
        """
        references = [self.reference(theme) for theme in themes]

        controllers: Dict[Tuple[str, str, str, str], ExtractionController] = {}
        for reference in references:
            controllers.setdefault(reference.key, self.controller_for(reference))

        self.logger.log(
            f"Resolving {len(controllers)} themes concurrently", logging.DEBUG
        )
        results = await asyncio.gather(
            *(asyncio.to_thread(controller.run) for controller in controllers.values()),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        return [
            self._share_root(reference, controllers[reference.key])
            for reference in references
        ]

    @staticmethod
    def _share_root(
        reference: ThemeReference, controller: ExtractionController
    ) -> ThemeReference:
        if controller.theme is not reference and not reference.has_populated_root():
            reference.set_root(controller.theme.root)
        return reference
