"""Rich console helpers for the CLI layer.

Two proxies are exported:

* :data:`out` — command results, written to stdout.
* :data:`console` — headers, hints for errors and other diagnostics,
  written to stderr.

A fresh :class:`rich.console.Console` is built per call so output always
follows the current ``sys.stdout`` / ``sys.stderr``.
"""

from __future__ import annotations

from rich.console import Console


def get_rich_console(*, stderr: bool = True) -> Console:
    """Create a Rich console targeting stderr (default) or stdout."""
    return Console(stderr=stderr, highlight=False, emoji=False, soft_wrap=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy over a Rich console."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object) -> None:
        """Render Rich markup to the proxy's stream."""
        get_rich_console(stderr=self._stderr).print(*objects)


console = _ConsoleProxy(stderr=True)
out = _ConsoleProxy(stderr=False)
