"""Shared pytest fixtures and configuration for the toxiproxy-cli test suite.

Guidelines
----------
* No network access in any test.
* ``requests`` is mocked at the infra boundary; the ``AdminClient`` is
  mocked everywhere else.
* Core tests must be pure — no side effects.
* Rendered output is asserted through ``capsys`` as plain text.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from emitting ANSI codes regardless of the CI environment."""
    for var in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE", "TOXIPROXY_URL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TERM", "dumb")
