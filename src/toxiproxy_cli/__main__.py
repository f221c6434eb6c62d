"""Allow ``python -m toxiproxy_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m toxiproxy_cli`` behaves identically to the
``toxiproxy-cli`` console script.
"""

from __future__ import annotations

from toxiproxy_cli.cli.app import cli

if __name__ == "__main__":
    cli()
