"""Concurrent page resolution with cache fallback.

``resolve`` starts the common and platform lookups as tasks, then reads the
cache while they run. A cache hit returns at once and the lookups are
cancelled. On a miss the first lookup to produce a page wins, and the page is
written back to the cache by a background task.

Every task the resolver starts is tracked until it has finished; ``drain()``
awaits the stragglers so none outlives the cache connection.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from tldrpage.errors import PageNotFoundError
from tldrpage.fetcher import page_url

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import Any

    from tldrpage.cache import PageCache
    from tldrpage.fetcher import Fetcher

log = structlog.get_logger()

COMMON_PLATFORM = "common"


class PageResolver:
    def __init__(self, fetcher: Fetcher, cache: PageCache, url_template: str) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._url_template = url_template
        self._background: set[asyncio.Task[Any]] = set()

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def _abandon(self, tasks: list[asyncio.Task[Any]]) -> None:
        for task in tasks:
            if not task.done():
                task.cancel()

    async def resolve(self, platform: str, command: str) -> str:
        """Return the page text for *command*.

        Raises ``PageNotFoundError`` when neither lookup returns a page and no
        valid cache entry exists.
        """
        lookups = [
            self._spawn(self._fetcher.fetch(page_url(self._url_template, p, command)))
            for p in (COMMON_PLATFORM, platform)
        ]

        cached = await self._cache.read(command)
        if cached is not None:
            log.debug("page_cache_hit", command=command)
            self._abandon(lookups)
            return cached

        for next_done in asyncio.as_completed(lookups):
            page = await next_done
            if page is not None:
                log.debug("page_fetched", command=command, platform=platform)
                self._abandon(lookups)
                self._spawn(self._cache.write(command, page))
                return page

        raise PageNotFoundError(command)

    async def drain(self) -> None:
        """Wait for pending cache writes and abandoned lookups to finish."""
        while self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
