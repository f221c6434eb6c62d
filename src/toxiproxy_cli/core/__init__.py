"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No network I/O except through an injected ``AdminClient``.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from toxiproxy_cli.core.admin_service import ProxyAdminService
from toxiproxy_cli.core.classifier import split_by_direction
from toxiproxy_cli.core.fields import (
    build_attributes,
    merge_attributes,
    parse_fields,
    resolve_kind,
)
from toxiproxy_cli.core.models import Direction, GenericAttributes, Proxy, Toxic, ToxicKind, ToxicSpec
from toxiproxy_cli.core.protocols import AdminClient

__all__: list[str] = [
    "AdminClient",
    "Direction",
    "GenericAttributes",
    "Proxy",
    "ProxyAdminService",
    "Toxic",
    "ToxicKind",
    "ToxicSpec",
    "build_attributes",
    "merge_attributes",
    "parse_fields",
    "resolve_kind",
    "split_by_direction",
]
