"""Core administration service — orchestrates proxy and toxic operations.

This is the central service class consumed by the CLI layer.  It
depends on an :class:`~toxiproxy_cli.core.protocols.AdminClient`
injected at construction time (dependency inversion), keeping the core
free of any transport imports.

Guarantees
----------
* No ``print()`` and no rendering — callers own all user-facing output.
* Only :class:`~toxiproxy_cli.exceptions.ToxiproxyCliError` subclasses
  escape; service errors are re-raised with the failed operation named.
* Stateless: every read goes back to the server.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from loguru import logger

from toxiproxy_cli.core.fields import merge_attributes
from toxiproxy_cli.core.models import Proxy, Toxic, ToxicSpec
from toxiproxy_cli.core.protocols import AdminClient
from toxiproxy_cli.exceptions import ServiceError, ToxicNotFoundError, ToxiproxyCliError

T = TypeVar("T")


class ProxyAdminService:
    """Stateless facade over an :class:`AdminClient`.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`AdminClient` protocol.
    """

    def __init__(self, client: AdminClient) -> None:
        self._client: AdminClient = client

    # ------------------------------------------------------------------
    # Proxies
    # ------------------------------------------------------------------

    def list_proxies(self) -> list[Proxy]:
        """Return all proxies sorted lexicographically by name."""
        proxies = self._call("retrieve proxies", self._client.list_proxies)
        return [proxies[name] for name in sorted(proxies)]

    def get_proxy(self, name: str) -> Proxy:
        """Fetch a single proxy by name."""
        return self._call(f"retrieve proxy {name}", self._client.get_proxy, name)

    def toggle_proxy(self, name: str) -> Proxy:
        """Invert the ``enabled`` flag of *name* and persist it.

        Issues exactly one fetch and one save.  Returns the proxy as
        reported after saving.
        """
        proxy = self.get_proxy(name)
        toggled = dataclasses.replace(proxy, enabled=not proxy.enabled)
        return self._call(f"toggle proxy {name}", self._client.save_proxy, toggled)

    def create_proxy(self, name: str, listen: str, upstream: str) -> Proxy:
        """Create an enabled proxy forwarding *listen* to *upstream*."""
        return self._call(
            "create proxy", self._client.create_proxy, name, listen, upstream,
        )

    def delete_proxy(self, name: str) -> None:
        """Delete *name*, confirming it exists first."""
        self.get_proxy(name)
        self._call("delete proxy", self._client.delete_proxy, name)

    # ------------------------------------------------------------------
    # Toxics
    # ------------------------------------------------------------------

    def add_toxic(self, proxy_name: str, spec: ToxicSpec) -> Toxic:
        """Attach one toxic to one stream of *proxy_name*."""
        return self._call("add toxic", self._client.add_toxic, proxy_name, spec)

    def update_toxic(
        self,
        proxy_name: str,
        toxic_name: str,
        fields: Mapping[str, int],
    ) -> Toxic:
        """Merge *fields* into an existing toxic's attributes.

        The toxic's name, kind and stream are left untouched.

        Raises
        ------
        ToxicNotFoundError
            If *proxy_name* has no toxic called *toxic_name*.
        UnknownToxicFieldError
            If a field does not belong to the toxic's kind.
        """
        proxy = self.get_proxy(proxy_name)
        existing = proxy.toxics.get(toxic_name)
        if existing is None:
            raise ToxicNotFoundError(
                f"Toxic '{toxic_name}' not found on proxy '{proxy_name}'",
                hint=f"List its toxics with `toxiproxy-cli inspect {proxy_name}`",
            )
        attributes = merge_attributes(existing.kind, existing.attributes, fields)
        return self._call(
            "update toxic",
            self._client.update_toxic,
            proxy_name,
            toxic_name,
            attributes,
        )

    def remove_toxic(self, proxy_name: str, toxic_name: str) -> None:
        """Detach *toxic_name* from *proxy_name*."""
        self._call("remove toxic", self._client.remove_toxic, proxy_name, toxic_name)

    # ------------------------------------------------------------------
    # Client delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(action: str, func: Callable[..., T], *args: Any) -> T:
        """Call the client and ensure only our exceptions escape."""
        logger.debug("{}", action)
        try:
            return func(*args)
        except ServiceError as exc:
            raise type(exc)(
                f"Failed to {action}: {exc}",
                hint=exc.hint,
                status_code=exc.status_code,
            ) from exc
        except ToxiproxyCliError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise ServiceError(
                f"Failed to {action}: unexpected client error: {exc}",
            ) from exc
