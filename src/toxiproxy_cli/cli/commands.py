"""Command handlers — one per CLI verb.

Each handler takes the :class:`ProxyAdminService` and the parsed
``argparse.Namespace``, validates required arguments **before** any
service call, delegates to the service and renders the result.
Handlers return an exit code; failures are raised as
:class:`~toxiproxy_cli.exceptions.ToxiproxyCliError` for the error
boundary in :mod:`toxiproxy_cli.cli.app`.
"""

from __future__ import annotations

import argparse

from toxiproxy_cli.cli import exit_codes, render
from toxiproxy_cli.core.admin_service import ProxyAdminService
from toxiproxy_cli.core.fields import build_attributes, parse_fields, resolve_kind
from toxiproxy_cli.core.models import Direction, ToxicSpec
from toxiproxy_cli.exceptions import (
    InputError,
    MissingArgumentError,
    PartialToxicAddError,
    ToxiproxyCliError,
)


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------

def _require_proxy_name(args: argparse.Namespace) -> str:
    name: str = getattr(args, "proxy_name", None) or ""
    if not name:
        raise MissingArgumentError("Proxy name is required as the first argument.")
    return name


def _require(args: argparse.Namespace, dest: str, flag: str) -> str:
    value: str = getattr(args, dest, None) or ""
    if not value:
        raise MissingArgumentError(f"Required argument '{flag}' was empty.")
    return value


def resolve_directions(upstream: bool, downstream: bool) -> tuple[Direction, ...]:
    """Map the ``--upstream`` / ``--downstream`` flags to target streams.

    Downstream is the default when neither flag is given; both flags
    select both streams, upstream first.
    """
    directions: list[Direction] = []
    if upstream:
        directions.append(Direction.UPSTREAM)
    if downstream or not upstream:
        directions.append(Direction.DOWNSTREAM)
    return tuple(directions)


# ---------------------------------------------------------------------------
# Proxy commands
# ---------------------------------------------------------------------------

def handle_list(service: ProxyAdminService, args: argparse.Namespace) -> int:
    render.render_proxy_table(service.list_proxies())
    return exit_codes.SUCCESS


def handle_inspect(service: ProxyAdminService, args: argparse.Namespace) -> int:
    name = _require_proxy_name(args)
    render.render_proxy(service.get_proxy(name))
    return exit_codes.SUCCESS


def handle_toggle(service: ProxyAdminService, args: argparse.Namespace) -> int:
    name = _require_proxy_name(args)
    render.render_toggled(service.toggle_proxy(name))
    return exit_codes.SUCCESS


def handle_create(service: ProxyAdminService, args: argparse.Namespace) -> int:
    name = _require_proxy_name(args)
    listen = _require(args, "listen", "listen")
    upstream = _require(args, "upstream", "upstream")
    render.render_created(service.create_proxy(name, listen, upstream))
    return exit_codes.SUCCESS


def handle_delete(service: ProxyAdminService, args: argparse.Namespace) -> int:
    name = _require_proxy_name(args)
    service.delete_proxy(name)
    render.render_deleted(name)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Toxic commands
# ---------------------------------------------------------------------------

def handle_toxic_add(service: ProxyAdminService, args: argparse.Namespace) -> int:
    """Add a toxic to the requested stream(s) of a proxy.

    All input is validated before the first service call.  With both
    ``--upstream`` and ``--downstream`` two independent toxics are added;
    if the second add fails the first one stays in place and the failure
    is raised as :class:`PartialToxicAddError`.

    The ``--toxicName`` value (possibly empty) is sent unchanged with
    each add.  The name the server assigns to the first toxic is *not*
    reused for the second, so an empty name yields ``<type>_upstream``
    and ``<type>_downstream``, while an explicit name makes a stock
    server reject the second add as a duplicate.
    """
    proxy_name = _require_proxy_name(args)
    toxic_type = _require(args, "toxic_type", "type")
    raw_fields = _require(args, "fields", "fields")

    fields = parse_fields(raw_fields)
    kind = resolve_kind(toxic_type)
    attributes = build_attributes(kind, fields)

    try:
        specs = [
            ToxicSpec(
                name=args.toxic_name or "",
                kind=kind,
                stream=direction,
                attributes=attributes,
                toxicity=args.toxicity,
            )
            for direction in resolve_directions(args.upstream, args.downstream)
        ]
    except ValueError as exc:
        raise InputError(str(exc)) from exc

    added: list[str] = []
    for spec in specs:
        try:
            toxic = service.add_toxic(proxy_name, spec)
        except ToxiproxyCliError as exc:
            if not added:
                raise
            raise PartialToxicAddError(
                f"{exc} (after adding {', '.join(added)})",
                added=tuple(added),
                hint=(
                    f"The earlier toxic is still active; remove it with "
                    f"`toxiproxy-cli toxic remove {proxy_name} -n <toxicName>`"
                ),
            ) from exc
        render.render_toxic_added(proxy_name, toxic)
        added.append(f"{toxic.stream.value} toxic '{toxic.name}'")

    return exit_codes.SUCCESS


def handle_toxic_update(service: ProxyAdminService, args: argparse.Namespace) -> int:
    proxy_name = _require_proxy_name(args)
    toxic_name = _require(args, "toxic_name", "toxicName")
    raw_fields = _require(args, "fields", "fields")

    fields = parse_fields(raw_fields)
    toxic = service.update_toxic(proxy_name, toxic_name, fields)
    render.render_toxic_updated(proxy_name, toxic)
    return exit_codes.SUCCESS


def handle_toxic_remove(service: ProxyAdminService, args: argparse.Namespace) -> int:
    proxy_name = _require_proxy_name(args)
    toxic_name = _require(args, "toxic_name", "toxicName")

    service.remove_toxic(proxy_name, toxic_name)
    render.render_toxic_removed(proxy_name, toxic_name)
    return exit_codes.SUCCESS
