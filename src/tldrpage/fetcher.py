"""HTTP lookup of raw tldr pages.

``Fetcher.fetch`` never raises: a transport error, a non-200 status or an
undecodable body all come back as ``None``. The resolver cannot tell "no such
page" from "network down", and does not need to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

if TYPE_CHECKING:
    from tldrpage.config import RemoteSettings

log = structlog.get_logger()


def build_http_client(settings: RemoteSettings | None = None) -> httpx.AsyncClient:
    """Create the shared client. Timeouts and redirects stay at httpx defaults."""
    headers = {}
    if settings is not None:
        headers["User-Agent"] = settings.user_agent
    return httpx.AsyncClient(headers=headers)


def page_url(template: str, platform: str, command: str) -> str:
    return template.format(platform=platform, command=command)


class Fetcher:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> str | None:
        """GET *url* and return its body, or ``None`` if it is not a 200."""
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.debug("page_fetch_failed", url=url, error=str(exc))
            return None

        if response.status_code != httpx.codes.OK:
            log.debug("page_fetch_status", url=url, status_code=response.status_code)
            return None

        try:
            return response.text
        except (UnicodeDecodeError, LookupError):
            log.debug("page_body_unreadable", url=url)
            return None
