"""Integration test fixtures.

CLI runs get a private cache directory through the environment, the same way
a user would configure one.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_structlog():
    """``main()`` configures structlog globally; undo it after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "cache"
    monkeypatch.setenv("TLDRPAGE__CACHE__DIR", str(path))
    return path


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if not k.startswith("TLDRPAGE__")}
    env["TLDRPAGE__CACHE__DIR"] = str(tmp_path / "cache")
    # Port 9 (discard) refuses connections, so lookups fail fast and offline.
    env["TLDRPAGE__REMOTE__PAGE_URL_TEMPLATE"] = (
        "http://127.0.0.1:9/pages/{platform}/{command}.md"
    )
    return env
