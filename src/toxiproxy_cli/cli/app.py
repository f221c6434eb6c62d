"""CLI application entry point and command routing for toxiproxy-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~toxiproxy_cli.exceptions.ToxiproxyCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — verbs are routed to
  :mod:`toxiproxy_cli.cli.commands`.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from rich.markup import escape

from toxiproxy_cli.cli import commands, exit_codes
from toxiproxy_cli.cli.console import console
from toxiproxy_cli.config import DEFAULT_URL, URL_ENV_VAR, resolve_settings
from toxiproxy_cli.core.admin_service import ProxyAdminService
from toxiproxy_cli.core.protocols import AdminClient
from toxiproxy_cli.exceptions import ToxiproxyCliError
from toxiproxy_cli.utils.log_config import configure_logging
from toxiproxy_cli.version import __version__

TOXIC_DESCRIPTION = """\
Default toxics:
  latency:     delay all data +/- jitter
               latency=<ms>,jitter=<ms>

  bandwidth:   limit to max KB/s
               rate=<KB/s>

  slow_close:  delay from closing
               delay=<ms>

  timeout:     stop all data and close after timeout
               timeout=<ms>

  slicer:      slice data into bits with optional delay
               average_size=<bytes>,size_variation=<bytes>,delay=<microseconds>

  reset_peer:  reset the connection after timeout
               timeout=<ms>

  limit_data:  close the connection after bytes have passed
               bytes=<bytes>

  Other types registered on the server (for example noop) are sent as given.

toxic add:
  usage: toxiproxy-cli toxic add <proxyName> --type <toxicType> --toxicName <toxicName> \\
         --fields <key1=value1,key2=value2...> [--upstream] [--downstream]

  example: toxiproxy-cli toxic add myProxy -t latency -n myToxic -f latency=100,jitter=50

toxic update:
  usage: toxiproxy-cli toxic update <proxyName> --toxicName <toxicName> \\
         --fields <key1=value1,key2=value2...>

  example: toxiproxy-cli toxic update myProxy -n myToxic -f jitter=25

toxic remove:
  usage: toxiproxy-cli toxic remove <proxyName> --toxicName <toxicName>

  example: toxiproxy-cli toxic remove myProxy -n myToxic
"""


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_proxy_name(parser: argparse.ArgumentParser) -> None:
    # Optional here so the handler reports a missing name itself.
    parser.add_argument("proxy_name", nargs="?", default="", metavar="<proxyName>")


def _add_toxic_name(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-n", "--toxicName", dest="toxic_name", default="", help="name of the toxic",
    )


def _add_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f", "--fields", default="", help="comma separated key=value toxic fields",
    )


def _build_toxic_parser(subparsers: argparse._SubParsersAction) -> None:
    toxic = subparsers.add_parser(
        "toxic",
        aliases=["t"],
        help="add, remove or update a toxic",
        description=TOXIC_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    toxic.set_defaults(help_parser=toxic)
    toxic_commands = toxic.add_subparsers(title="toxic commands", metavar="<command>")

    add = toxic_commands.add_parser("add", aliases=["a"], help="add a new toxic")
    _add_proxy_name(add)
    _add_toxic_name(add)
    add.add_argument("-t", "--type", dest="toxic_type", default="", help="type of toxic")
    _add_fields(add)
    add.add_argument("-u", "--upstream", action="store_true", help="add toxic to upstream")
    add.add_argument(
        "-d", "--downstream", action="store_true", help="add toxic to downstream (default)",
    )
    add.add_argument(
        "--toxicity", type=float, default=1.0,
        help="probability of the toxic being applied (0.0-1.0, default 1.0)",
    )
    add.set_defaults(handler=commands.handle_toxic_add)

    update = toxic_commands.add_parser("update", aliases=["u"], help="update an enabled toxic")
    _add_proxy_name(update)
    _add_toxic_name(update)
    _add_fields(update)
    update.set_defaults(handler=commands.handle_toxic_update)

    remove = toxic_commands.add_parser(
        "remove", aliases=["r", "delete", "d"], help="remove an enabled toxic",
    )
    _add_proxy_name(remove)
    _add_toxic_name(remove)
    remove.set_defaults(handler=commands.handle_toxic_remove)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its command tree."""
    parser = argparse.ArgumentParser(
        prog="toxiproxy-cli",
        description="Simulate network and system conditions with Toxiproxy.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--host",
        default=None,
        help=f"Toxiproxy server URL (env: {URL_ENV_VAR}, default: {DEFAULT_URL})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log requests to stderr",
    )

    subparsers = parser.add_subparsers(title="commands", metavar="<command>")

    list_parser = subparsers.add_parser("list", aliases=["l", "li", "ls"], help="list all proxies")
    list_parser.set_defaults(handler=commands.handle_list)

    inspect = subparsers.add_parser("inspect", aliases=["i", "ins"], help="inspect a single proxy")
    _add_proxy_name(inspect)
    inspect.set_defaults(handler=commands.handle_inspect)

    toggle = subparsers.add_parser(
        "toggle", aliases=["tog"], help="toggle enabled status on a proxy",
    )
    _add_proxy_name(toggle)
    toggle.set_defaults(handler=commands.handle_toggle)

    create = subparsers.add_parser("create", aliases=["c", "new"], help="create a new proxy")
    _add_proxy_name(create)
    create.add_argument(
        "-l", "--listen", default="", help="proxy will listen on this address",
    )
    create.add_argument(
        "-u", "--upstream", default="", help="proxy will forward to this address",
    )
    create.set_defaults(handler=commands.handle_create)

    delete = subparsers.add_parser("delete", aliases=["d"], help="delete a proxy")
    _add_proxy_name(delete)
    delete.set_defaults(handler=commands.handle_delete)

    _build_toxic_parser(subparsers)
    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, *, client: AdminClient | None = None) -> int:
    """Run the toxiproxy-cli command line.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    client:
        Administration client to use instead of an HTTP client built from
        ``--host``.  Tests inject a mock here.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = resolve_settings(args.host, verbose=args.verbose)
    configure_logging(settings.verbose)

    handler = getattr(args, "handler", None)
    if handler is None:
        getattr(args, "help_parser", parser).print_help()
        return exit_codes.SUCCESS

    if client is None:
        from toxiproxy_cli.infra.http_client import ToxiproxyHttpClient

        client = ToxiproxyHttpClient(settings.base_url)

    return handler(ProxyAdminService(client), args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ToxiproxyCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.GENERAL_ERROR)
