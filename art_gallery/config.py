"""Configuration for the Virtual Art Gallery."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigError

# Catalog
DEFAULT_BASE_URL = "https://api.harvardartmuseums.org"
PAGE_SIZE = 12
FACET_PAGE_SIZE = 100  # The facet endpoints return 10 records unless told otherwise

# Pagination bar
PAGINATION_WINDOW = 10

# Timeouts
FETCH_TIMEOUT = 30

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {raw!r}")


@dataclass
class Settings:
    """Runtime settings, usually loaded from the environment."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    fetch_timeout: float = FETCH_TIMEOUT

    # SSL bypass for debugging
    ssl_bypass: bool = False

    # Re-fetch facet option lists on every query change instead of once
    refetch_facets_on_change: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None,
                 api_key: str | None = None) -> "Settings":
        """
        Load settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests)
            api_key: Explicit key, takes precedence over HARVARD_API_KEY

        Raises:
            ConfigError: if no API key is available or a value is malformed
        """
        env = os.environ if environ is None else environ

        key = api_key or env.get("HARVARD_API_KEY", "").strip()
        if not key:
            raise ConfigError(
                "No Harvard Art Museums API key configured. Set HARVARD_API_KEY."
            )

        raw_timeout = env.get("GALLERY_FETCH_TIMEOUT", str(FETCH_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(
                f"GALLERY_FETCH_TIMEOUT must be a number, got {raw_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigError(f"GALLERY_FETCH_TIMEOUT must be positive, got {timeout}")

        return cls(
            api_key=key,
            base_url=env.get("HARVARD_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            fetch_timeout=timeout,
            ssl_bypass=_parse_bool("GALLERY_SSL_BYPASS", env.get("GALLERY_SSL_BYPASS", "")),
            refetch_facets_on_change=_parse_bool(
                "GALLERY_REFETCH_FACETS", env.get("GALLERY_REFETCH_FACETS", "")
            ),
        )
