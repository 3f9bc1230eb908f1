from __future__ import annotations

from pydantic import BaseModel


class PageCacheEntry(BaseModel):
    """Cached copy of a single tldr page."""

    command: str
    page: str  # Raw page markdown
    created_at: int  # Unix time (seconds)

    def is_valid(self, now: int, ttl_seconds: int) -> bool:
        return now - self.created_at < ttl_seconds
