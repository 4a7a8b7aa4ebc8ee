"""
Pydantic model for a remote theme reference.

A theme is identified by ``(owner, name, git_ref)``. The ``root`` field is
filled in once the archive has been downloaded and extracted, and points at
the top-level directory the archive unpacked to.
"""

import os
import re
from typing import Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from remotetheme.remotetheme_exceptions import InvalidThemeError, RemoteThemeException

DEFAULT_HOST = "github.com"
DEFAULT_GIT_REF = "HEAD"

OWNER_PATTERN = r"(?P<owner>[a-z0-9\-]+)"
NAME_PATTERN = r"(?P<name>[a-z0-9._\-]+)"
REF_PATTERN = r"@(?P<ref>[a-z0-9._/\-]+)"
THEME_REGEX = re.compile(
    r"\A(?:(?P<scheme>https?)://(?P<host>[^/]+)/)?"
    + OWNER_PATTERN
    + "/"
    + NAME_PATTERN
    + "(?:"
    + REF_PATTERN
    + r")?\Z",
    re.IGNORECASE,
)


class ThemeReference(BaseModel):
    """
    Identifies one downloadable theme archive.

    ``owner``, ``name``, ``git_ref`` and ``host`` are immutable once
    constructed. ``root`` may only point at an existing, non-empty directory.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    owner: str = Field(..., min_length=1, frozen=True, description="Account owning the repository")
    name: str = Field(..., min_length=1, frozen=True, description="Repository name")
    git_ref: str = Field(
        DEFAULT_GIT_REF, alias="gitRef", min_length=1, frozen=True,
        description="Branch, tag or commit",
    )
    host: str = Field(DEFAULT_HOST, frozen=True, description="Host serving the repository")
    root: Optional[str] = Field(None, description="Resolved top-level directory of the extracted theme")

    @field_validator("root")
    @classmethod
    def _root_is_populated_dir(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not os.path.isdir(value):
            raise ValueError(f"theme root is not a directory: {value}")
        if not os.listdir(value):
            raise ValueError(f"theme root is empty: {value}")
        return value

    @classmethod
    def parse(cls, raw_theme: str, allowed_hosts=(DEFAULT_HOST,)) -> "ThemeReference":
        """
        Parse a theme string such as ``owner/name@ref`` or
        ``https://github.com/owner/name``.

        The string is lower-cased before matching, so the casing of the
        extracted directory cannot be derived from the result.

        Raises:
            InvalidThemeError: If the string is malformed or the host is not allowed
        """
        theme = str(raw_theme or "").strip().lower()
        match = THEME_REGEX.match(theme)
        if not match:
            raise InvalidThemeError(f"{raw_theme!r} is not a valid remote theme")

        host = match.group("host") or DEFAULT_HOST
        if host not in allowed_hosts:
            raise InvalidThemeError(
                f"Host {host!r} is not allowed for remote themes "
                f"(allowed: {', '.join(allowed_hosts)})"
            )

        return cls(
            owner=match.group("owner"),
            name=match.group("name"),
            git_ref=match.group("ref") or DEFAULT_GIT_REF,
            host=host,
        )

    @property
    def key(self) -> Tuple[str, str, str, str]:
        """Identity of the archive this reference points at."""
        return (self.host, self.owner, self.name, self.git_ref)

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.name}"

    def archive_url(self, archive_host: str, archive_marker: str = "zip") -> str:
        """
        Full URL of the archive download endpoint for this theme.

        Each segment is percent-encoded on its own, so a ``/`` inside the ref
        does not become a path separator.
        """
        segments = [
            quote(segment, safe="")
            for segment in (self.owner, self.name, archive_marker, self.git_ref)
        ]
        return "/".join([archive_host.rstrip("/"), *segments])

    def set_root(self, path: str) -> None:
        """
        Record the resolved root. A root can be assigned only once, unless
        the previous one has since disappeared or been emptied.

        Raises:
            RemoteThemeException: If a different, still populated root was already set
        """
        if self.root is not None and self.root != path and self.has_populated_root():
            raise RemoteThemeException(
                f"Root for {self.name_with_owner} already set to {self.root}"
            )
        self.root = path

    def has_populated_root(self) -> bool:
        """True when ``root`` is set and is a non-empty directory."""
        return bool(self.root) and os.path.isdir(self.root) and bool(os.listdir(self.root))

    def __str__(self) -> str:
        return f"{self.name_with_owner}@{self.git_ref}"
