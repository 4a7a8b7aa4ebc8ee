"""
Data models for remote themes.

This package provides Pydantic models for theme references and for the
status of an archive download response.
"""

from .theme import ThemeReference, DEFAULT_GIT_REF, DEFAULT_HOST
from .response import ResponseKind, ResponseStatus

__all__ = [
    "ThemeReference",
    "DEFAULT_GIT_REF",
    "DEFAULT_HOST",
    "ResponseKind",
    "ResponseStatus",
]
