from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class SpanKind(StrEnum):
    HEADING = "heading"
    EXAMPLE = "example"
    PLAIN = "plain"


class Span(BaseModel):
    text: str
    kind: SpanKind = SpanKind.PLAIN


class RenderedLine(BaseModel):
    """One output line; an empty ``spans`` list is a blank line."""

    spans: list[Span] = []

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


class RenderedPage(BaseModel):
    lines: list[RenderedLine] = []

    @property
    def plain(self) -> str:
        """Unstyled output, each line terminated by a newline."""
        return "".join(line.text + "\n" for line in self.lines)
