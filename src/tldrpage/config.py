"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (TLDRPAGE__CACHE__TTL_SECONDS=3600)
  2. tldrpage.yaml          (searched in cwd, then the user config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from tldrpage.errors import CacheUnavailableError

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("tldrpage")

# Relative to the user's home directory.
_DEFAULT_CACHE_SUBDIR = Path(".tldr") / "cache"

CACHE_DB_NAME = "pages.db"


def _find_config_file() -> str | None:
    """Return the path of the first tldrpage.yaml found, or None."""
    candidates = [
        Path("tldrpage.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "tldrpage.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class RemoteSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page_url_template: str = (
        "https://raw.githubusercontent.com/tldr-pages/tldr/main/pages/{platform}/{command}.md"
    )
    user_agent: str = "tldrpage"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dir: str | None = None  # None → ~/.tldr/cache
    ttl_seconds: int = 60 * 60 * 24


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: TLDRPAGE__CACHE__DIR=/tmp/tldr
        env_prefix="TLDRPAGE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    remote: RemoteSettings = RemoteSettings()
    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )


def resolve_cache_dir(settings: CacheSettings) -> Path:
    """Return the cache directory, defaulting to ``~/.tldr/cache``.

    Raises ``CacheUnavailableError`` when the home directory cannot be
    determined. Callers treat that as fatal.
    """
    try:
        if settings.dir is not None:
            return Path(settings.dir).expanduser()
        return Path.home() / _DEFAULT_CACHE_SUBDIR
    except RuntimeError as exc:
        raise CacheUnavailableError(str(exc)) from exc
