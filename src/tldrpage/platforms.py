from __future__ import annotations

import platform as _platform

# Host names that tldr-pages files under a different directory.
_PLATFORM_ALIASES = {"darwin": "osx"}


def get_platform(system: str | None = None) -> str:
    """Return the tldr-pages platform directory for the host OS."""
    name = (system if system is not None else _platform.system()).lower()
    return _PLATFORM_ALIASES.get(name, name)
