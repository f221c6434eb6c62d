"""Runtime settings resolved from command-line flags and the environment.

Precedence for the server address:

1. ``--host`` on the command line.
2. The ``TOXIPROXY_URL`` environment variable.
3. :data:`DEFAULT_URL`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_URL: str = "http://localhost:8474"
"""Address of a Toxiproxy server started with its default options."""

URL_ENV_VAR: str = "TOXIPROXY_URL"


@dataclass(frozen=True, slots=True)
class Settings:
    """Settings for a single CLI invocation."""

    base_url: str
    """Normalised server URL, scheme included, no trailing slash."""

    verbose: bool = False
    """Whether debug logging is written to stderr."""


def normalize_url(raw: str) -> str:
    """Add a missing ``http://`` scheme and strip trailing slashes."""
    url = raw.strip().rstrip("/")
    if "://" not in url:
        url = f"http://{url}"
    return url


def resolve_settings(
    host: str | None,
    *,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build :class:`Settings` from the ``--host`` flag and the environment."""
    env = os.environ if environ is None else environ
    raw = host or env.get(URL_ENV_VAR) or DEFAULT_URL
    return Settings(base_url=normalize_url(raw), verbose=verbose)
