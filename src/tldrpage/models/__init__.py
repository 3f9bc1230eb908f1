from __future__ import annotations

from tldrpage.models.cache import PageCacheEntry
from tldrpage.models.render import RenderedLine, RenderedPage, Span, SpanKind

__all__ = [
    # cache
    "PageCacheEntry",
    # render
    "SpanKind",
    "Span",
    "RenderedLine",
    "RenderedPage",
]
