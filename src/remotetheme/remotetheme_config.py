"""
Configuration for remote theme resolution.

Settings can be built from a dictionary or loaded from a TOML file, e.g.:

    [remote_theme]
    network_timeout = 30
    timeout_command = ["timeout", "60"]
    extractor = "unzip"
"""

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from remotetheme.remotetheme_exceptions import RemoteThemeException

VERSION = "0.4.0"

TIMEOUT_ENV_VAR = "REMOTE_THEME_TIMEOUT"

EXTRACTOR_UNZIP = "unzip"
EXTRACTOR_BUILTIN = "builtin"


@dataclass
class RemoteThemeConfig:
    """
    Configuration parameters for downloading and extracting remote themes.
    """

    host: str = "https://codeload.github.com"
    archive_marker: str = "zip"
    network_timeout: float = 60.0
    download_timeout: Optional[float] = 600.0
    timeout_command: List[str] = field(default_factory=list)
    extraction_timeout: Optional[float] = None
    unzip_command: List[str] = field(default_factory=lambda: ["unzip"])
    extractor: str = EXTRACTOR_UNZIP
    temp_prefix: str = "remote-theme-"
    allowed_hosts: List[str] = field(default_factory=lambda: ["github.com"])
    chunk_size: int = 16 * 1024

    def __post_init__(self) -> None:
        if self.extractor not in (EXTRACTOR_UNZIP, EXTRACTOR_BUILTIN):
            raise RemoteThemeException(
                f"Unsupported extractor: {self.extractor!r} "
                f"(expected {EXTRACTOR_UNZIP!r} or {EXTRACTOR_BUILTIN!r})"
            )
        if self.network_timeout <= 0:
            raise RemoteThemeException("'network_timeout' must be positive")
        if self.extraction_timeout is not None and self.extraction_timeout <= 0:
            raise RemoteThemeException("'extraction_timeout' must be positive")
        if self.download_timeout is not None and self.download_timeout <= 0:
            raise RemoteThemeException("'download_timeout' must be positive")
        if self.chunk_size <= 0:
            raise RemoteThemeException("'chunk_size' must be positive")
        if not self.unzip_command:
            raise RemoteThemeException("'unzip_command' must not be empty")

    @property
    def user_agent(self) -> str:
        return f"remotetheme/{VERSION} (+python-requests)"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "RemoteThemeConfig":
        """
        Create a RemoteThemeConfig from a dictionary (e.g. loaded from TOML).

        Values may be nested under a ``remote_theme`` table. The
        REMOTE_THEME_TIMEOUT environment variable overrides ``network_timeout``.

        Raises:
            RemoteThemeException: If a key is unknown or has the wrong type
        """
        section = config_dict.get("remote_theme", config_dict)
        if not isinstance(section, dict):
            raise RemoteThemeException("'remote_theme' must be a table")

        known = {f.name: f for f in dataclasses.fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in section.items():
            if key not in known:
                raise RemoteThemeException(f"Unknown configuration key: {key}")
            kwargs[key] = _coerce(key, value)

        env_timeout = os.environ.get(TIMEOUT_ENV_VAR)
        if env_timeout:
            kwargs["network_timeout"] = _coerce("network_timeout", env_timeout)

        return cls(**kwargs)

    @classmethod
    def load(cls, path: str) -> "RemoteThemeConfig":
        """
        Load configuration from a TOML file.

        Raises:
            RemoteThemeException: If the file is missing or invalid
        """
        if not os.path.exists(path):
            raise RemoteThemeException(f"Configuration file not found: {path}")
        try:
            with open(path, "rb") as f:
                toml_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise RemoteThemeException(f"Invalid TOML in {path}: {e}") from e
        return cls.from_dict(toml_dict)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


_FLOAT_KEYS = {"network_timeout", "download_timeout", "extraction_timeout"}
_OPTIONAL_KEYS = {"download_timeout", "extraction_timeout"}
_LIST_KEYS = {"timeout_command", "unzip_command", "allowed_hosts"}
_STR_KEYS = {"host", "archive_marker", "extractor", "temp_prefix"}


def _coerce(key: str, value: Any) -> Any:
    if key in _FLOAT_KEYS:
        if value is None and key in _OPTIONAL_KEYS:
            return None
        if isinstance(value, bool):
            raise RemoteThemeException(f"'{key}' must be a number")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise RemoteThemeException(f"'{key}' must be a number, got {value!r}")
    if key in _LIST_KEYS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise RemoteThemeException(f"'{key}' must be a list of strings")
        return list(value)
    if key in _STR_KEYS:
        if not isinstance(value, str):
            raise RemoteThemeException(f"'{key}' must be a string")
        return value
    if key == "chunk_size":
        if isinstance(value, bool) or not isinstance(value, int):
            raise RemoteThemeException("'chunk_size' must be an integer")
        return value
    return value
