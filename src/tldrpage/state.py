"""Application state wiring.

``open_app_state`` builds every long-lived component once at start-up and
tears them down in reverse order. The resolver is drained before the cache
connection closes so no background write is lost.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tldrpage.cache import open_cache
from tldrpage.config import CACHE_DB_NAME, resolve_cache_dir
from tldrpage.fetcher import Fetcher, build_http_client
from tldrpage.resolver import PageResolver

if TYPE_CHECKING:
    import httpx

    from tldrpage.cache import PageCache
    from tldrpage.config import Settings


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    cache: PageCache
    fetcher: Fetcher
    resolver: PageResolver


@asynccontextmanager
async def open_app_state(settings: Settings) -> AsyncIterator[AppState]:
    # Raises CacheUnavailableError before any I/O happens.
    db_path = resolve_cache_dir(settings.cache) / CACHE_DB_NAME

    async with (
        open_cache(db_path, ttl_seconds=settings.cache.ttl_seconds) as cache,
        build_http_client(settings.remote) as client,
    ):
        fetcher = Fetcher(client)
        resolver = PageResolver(fetcher, cache, settings.remote.page_url_template)
        try:
            yield AppState(
                settings=settings,
                http_client=client,
                cache=cache,
                fetcher=fetcher,
                resolver=resolver,
            )
        finally:
            await resolver.drain()
