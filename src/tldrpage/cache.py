"""SQLite page cache with a fixed validity window.

Each command maps to one row holding a JSON-serialized ``PageCacheEntry``.
Reads that find an expired or undeserializable record erase it and report a
miss. A corrupted record is logged as a warning, an expired one at debug
level only.

All cache operations catch ``aiosqlite.Error`` internally and degrade
gracefully: read failures return ``None`` (treated as cache miss by callers),
write failures are logged and ignored (fetched content is still returned).
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import aiosqlite
import structlog
from pydantic import ValidationError

from tldrpage.models.cache import PageCacheEntry

if TYPE_CHECKING:
    from pathlib import Path

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 60 * 60 * 24

_CREATE_PAGE_TABLE = """
CREATE TABLE IF NOT EXISTS page_cache (
    command  TEXT PRIMARY KEY,
    payload  TEXT NOT NULL
)
"""


class PageCache:
    """SQLite-backed tldr page cache keyed by command name."""

    def __init__(
        self,
        db: aiosqlite.Connection,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db = db
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def init_db(self) -> None:
        """Create the table and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_PAGE_TABLE)
        await self._db.commit()

    def _now(self) -> int:
        return int(self._clock())

    async def read(self, command: str) -> str | None:
        """Return the cached page for *command*, or ``None`` on a miss."""
        try:
            cursor = await self._db.execute(
                "SELECT payload FROM page_cache WHERE command = ?", (command,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            try:
                entry = PageCacheEntry.model_validate_json(row[0])
            except ValidationError:
                log.warning("cache_entry_corrupted", command=command)
                await self.erase(command)
                return None

            if not entry.is_valid(self._now(), self._ttl_seconds):
                log.debug("cache_entry_expired", command=command, created_at=entry.created_at)
                await self.erase(command)
                return None

            return entry.page
        except aiosqlite.Error:
            log.warning("cache_read_error", command=command, exc_info=True)
            return None

    async def write(self, command: str, page: str) -> None:
        """Store *page* under *command*, replacing any prior entry. Non-fatal on failure."""
        entry = PageCacheEntry(command=command, page=page, created_at=self._now())
        try:
            await self._db.execute(
                "INSERT OR REPLACE INTO page_cache (command, payload) VALUES (?, ?)",
                (command, entry.model_dump_json()),
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", command=command, exc_info=True)

    async def erase(self, command: str) -> None:
        try:
            await self._db.execute("DELETE FROM page_cache WHERE command = ?", (command,))
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_erase_error", command=command, exc_info=True)

    async def cleanup_expired(self) -> int:
        """Delete expired and corrupted entries. Returns the number removed."""
        try:
            cursor = await self._db.execute("SELECT command, payload FROM page_cache")
            rows = await cursor.fetchall()

            now = self._now()
            stale: list[str] = []
            for command, payload in rows:
                try:
                    entry = PageCacheEntry.model_validate_json(payload)
                except ValidationError:
                    stale.append(command)
                    continue
                if not entry.is_valid(now, self._ttl_seconds):
                    stale.append(command)

            if stale:
                await self._db.executemany(
                    "DELETE FROM page_cache WHERE command = ?", [(c,) for c in stale]
                )
                await self._db.commit()
            log.debug("cache_cleanup_complete", deleted=len(stale))
            return len(stale)
        except aiosqlite.Error:
            log.warning("cache_cleanup_error", exc_info=True)
            return 0


@asynccontextmanager
async def open_cache(
    db_path: Path, ttl_seconds: int = DEFAULT_TTL_SECONDS
) -> AsyncIterator[PageCache]:
    """Open the on-disk cache, creating its directory if needed.

    If the database cannot be created or opened, an empty in-memory cache is
    used instead: every read misses and nothing outlives the process.
    """
    db = await _connect(db_path, ttl_seconds)
    try:
        yield PageCache(db, ttl_seconds=ttl_seconds)
    finally:
        await db.close()


async def _connect(db_path: Path, ttl_seconds: int) -> aiosqlite.Connection:
    db: aiosqlite.Connection | None = None
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        db = await aiosqlite.connect(db_path)
        await PageCache(db, ttl_seconds=ttl_seconds).init_db()
        return db
    except (OSError, aiosqlite.Error):
        log.warning("cache_unavailable", path=str(db_path), exc_info=True)
        if db is not None:
            await db.close()

    db = await aiosqlite.connect(":memory:")
    await PageCache(db, ttl_seconds=ttl_seconds).init_db()
    return db
