"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from toxiproxy_cli.core.models import Proxy, Toxic, ToxicAttributes, ToxicSpec


class AdminClient(Protocol):
    """Contract for Toxiproxy administration backends.

    Every call is a single synchronous request/response.  Implementations
    must map all transport exceptions to
    :class:`~toxiproxy_cli.exceptions.ServiceError` subclasses.
    """

    def list_proxies(self) -> dict[str, Proxy]:
        """Return every proxy keyed by name."""
        ...  # pragma: no cover

    def get_proxy(self, name: str) -> Proxy:
        """Return one proxy.

        Raises
        ------
        NotFoundError
            If no proxy is called *name*.
        """
        ...  # pragma: no cover

    def create_proxy(self, name: str, listen: str, upstream: str) -> Proxy:
        """Create an enabled proxy.

        Raises
        ------
        ConflictError
            If a proxy called *name* already exists.
        """
        ...  # pragma: no cover

    def delete_proxy(self, name: str) -> None:
        """Delete a proxy and all of its toxics."""
        ...  # pragma: no cover

    def save_proxy(self, proxy: Proxy) -> Proxy:
        """Persist the mutable settings of *proxy* (its ``enabled`` flag)."""
        ...  # pragma: no cover

    def add_toxic(self, proxy_name: str, toxic: ToxicSpec) -> Toxic:
        """Attach *toxic* to a proxy; an empty name is chosen by the server."""
        ...  # pragma: no cover

    def update_toxic(
        self,
        proxy_name: str,
        toxic_name: str,
        attributes: ToxicAttributes,
    ) -> Toxic:
        """Replace the attributes of an existing toxic."""
        ...  # pragma: no cover

    def remove_toxic(self, proxy_name: str, toxic_name: str) -> None:
        """Detach a toxic from a proxy."""
        ...  # pragma: no cover
