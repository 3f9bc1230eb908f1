"""Command-line entry point: ``tldrpage COMMAND``."""

from __future__ import annotations

import argparse
import asyncio
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError
from rich.console import Console

from tldrpage import __version__
from tldrpage.config import Settings
from tldrpage.errors import PageNotFoundError, TldrError
from tldrpage.logging_config import configure_logging
from tldrpage.platforms import get_platform
from tldrpage.render import render, to_rich_text
from tldrpage.state import open_app_state

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tldrpage",
        description="Show the tldr page for a command.",
    )
    parser.add_argument("command", help="command to look up, e.g. tar")
    parser.add_argument(
        "-p",
        "--platform",
        help="page platform to prefer (default: the host OS)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def _lookup(settings: Settings, platform: str, command: str) -> str:
    async with open_app_state(settings) as state:
        await state.cache.cleanup_expired()
        return await state.resolver.resolve(platform, command)


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    stdout = Console(highlight=False)
    stderr = Console(stderr=True, highlight=False)

    try:
        settings = Settings()
    except ValidationError as exc:
        stderr.print(f"Invalid configuration:\n{exc}", markup=False)
        return 1
    configure_logging(settings.logging)

    platform = args.platform or get_platform()
    try:
        content = asyncio.run(_lookup(settings, platform, args.command))
    except PageNotFoundError as exc:
        stderr.print(exc.message, markup=False)
        return 1
    except TldrError as exc:
        log.error("startup_failed", code=exc.code, message=exc.message)
        stderr.print(exc.message, style="red", markup=False)
        return 1

    stdout.print(to_rich_text(render(content)), end="", soft_wrap=True)
    return 0
