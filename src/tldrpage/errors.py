"""Structured error types.

Every failure that reaches the CLI is a ``TldrError`` carrying a stable
``ErrorCode``. Cache misses and transport failures are not errors at this
level: they are recovered inside the cache and fetcher and surface as ``None``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    PAGE_NOT_FOUND = "PAGE_NOT_FOUND"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"


class TldrError(Exception):
    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable


class PageNotFoundError(TldrError):
    """Neither the common nor the platform page could be fetched."""

    def __init__(self, command: str) -> None:
        super().__init__(ErrorCode.PAGE_NOT_FOUND, f"Page not found: {command}")
        self.command = command


class CacheUnavailableError(TldrError):
    """The cache directory could not be determined. Fatal at start-up."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            ErrorCode.CACHE_UNAVAILABLE, f"Could not read home directory: {reason}"
        )
