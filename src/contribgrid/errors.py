"""Exception hierarchy shared by the contribgrid pipeline."""

from __future__ import annotations


class ContribGridError(Exception):
    """Base class for errors raised by contribgrid."""


class CacheError(ContribGridError):
    """Storage fault or unreadable entry in the contribution cache."""

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"{key}: {detail}" if detail else key)


class CacheReadError(CacheError):
    """Raised internally when a cache entry cannot be read or parsed."""


class CacheWriteError(CacheError):
    """Raised internally when a cache entry cannot be persisted."""


class FetchError(ContribGridError):
    """Remote contribution data could not be obtained.

    Transport failures, non-success statuses and malformed bodies all collapse
    into this one kind; ``status`` is ``None`` when no response was received.
    """

    def __init__(self, url: str, status: int | None = None, detail: str = "") -> None:
        self.url = url
        self.status = status
        self.detail = detail
        label = f"HTTP {status}" if status is not None else "request failed"
        message = f"{label} for {url}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


__all__ = [
    "CacheError",
    "CacheReadError",
    "CacheWriteError",
    "ContribGridError",
    "FetchError",
]
