"""Rendering of simplified tldr page markdown.

Only the line prefixes used by tldr-pages are recognised; see
https://github.com/tldr-pages/tldr/blob/main/CONTRIBUTING.md#markdown-format

``render`` is pure and returns tagged spans. Turning those into terminal
styles is left to ``to_rich_text``.
"""

from __future__ import annotations

from rich.text import Text

from tldrpage.models.render import RenderedLine, RenderedPage, Span, SpanKind

INDENT = "  "

STYLES: dict[SpanKind, str] = {
    SpanKind.HEADING: "magenta",
    SpanKind.EXAMPLE: "green",
    SpanKind.PLAIN: "",
}


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def render_line(line: str) -> RenderedLine:
    if not line:
        return RenderedLine()

    match line[0]:
        case "#":
            spans = [Span(text=INDENT), Span(text=line.lstrip("# "), kind=SpanKind.HEADING)]
        case ">":
            spans = [Span(text=INDENT + line.lstrip("> "))]
        case "-":
            spans = [Span(text=line, kind=SpanKind.EXAMPLE)]
        case "`":
            spans = [Span(text=INDENT + line.strip("`"))]
        case _:
            spans = [Span(text=line)]
    return RenderedLine(spans=spans)


def render(text: str) -> RenderedPage:
    return RenderedPage(lines=[render_line(line) for line in _split_lines(text)])


def to_rich_text(page: RenderedPage) -> Text:
    result = Text()
    for line in page.lines:
        for span in line.spans:
            result.append(span.text, style=STYLES[span.kind])
        result.append("\n")
    return result
