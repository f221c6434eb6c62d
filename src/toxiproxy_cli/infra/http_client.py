"""``requests``-backed implementation of :class:`~toxiproxy_cli.core.protocols.AdminClient`.

This module is the **only** place in the codebase that imports
``requests``.  All transport exceptions and non-2xx responses are
caught here and re-raised as typed
:class:`~toxiproxy_cli.exceptions.ServiceError` subclasses — nothing raw
escapes the infrastructure boundary.

Wire format
-----------
The Toxiproxy HTTP API speaks JSON.  A proxy looks like::

    {"name": "redis", "listen": "127.0.0.1:26379",
     "upstream": "127.0.0.1:6379", "enabled": true,
     "toxics": [{"name": "latency_downstream", "type": "latency",
                 "stream": "downstream", "toxicity": 1,
                 "attributes": {"latency": 100, "jitter": 0}}]}

Errors come back as ``{"error": "proxy not found", "status": 404}``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests
from loguru import logger

from toxiproxy_cli.core.models import (
    ATTRIBUTE_TYPES,
    Direction,
    GenericAttributes,
    Proxy,
    Toxic,
    ToxicAttributes,
    ToxicKind,
    ToxicSpec,
    attribute_names,
    attributes_as_dict,
    kind_name,
    parse_kind,
)
from toxiproxy_cli.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceConnectionError,
    ServiceError,
    ServiceResponseError,
)


class ToxiproxyHttpClient:
    """Concrete :class:`AdminClient` for a Toxiproxy server.

    Usage::

        client = ToxiproxyHttpClient("http://localhost:8474")
        proxies = client.list_proxies()

    This class satisfies the :class:`~toxiproxy_cli.core.protocols.AdminClient`
    protocol structurally — no explicit inheritance required.
    """

    _STATUS_ERRORS: dict[int, type[ServiceError]] = {
        404: NotFoundError,
        409: ConflictError,
    }

    def __init__(self, base_url: str, *, session: requests.Session | None = None) -> None:
        self._base_url: str = base_url.rstrip("/")
        self._session: requests.Session = session or requests.Session()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_proxies(self) -> dict[str, Proxy]:
        data = self._request("GET", "/proxies")
        if not isinstance(data, dict):
            raise ServiceResponseError("Expected a JSON object of proxies from the server.")
        return {str(name): self._decode_proxy(raw) for name, raw in data.items()}

    def get_proxy(self, name: str) -> Proxy:
        return self._decode_proxy(self._request("GET", _proxy_path(name)))

    def create_proxy(self, name: str, listen: str, upstream: str) -> Proxy:
        payload = {
            "name": name,
            "listen": listen,
            "upstream": upstream,
            "enabled": True,
        }
        return self._decode_proxy(self._request("POST", "/proxies", payload))

    def delete_proxy(self, name: str) -> None:
        self._request("DELETE", _proxy_path(name))

    def save_proxy(self, proxy: Proxy) -> Proxy:
        payload = {
            "listen": proxy.listen,
            "upstream": proxy.upstream,
            "enabled": proxy.enabled,
        }
        return self._decode_proxy(self._request("POST", _proxy_path(proxy.name), payload))

    def add_toxic(self, proxy_name: str, toxic: ToxicSpec) -> Toxic:
        payload = {
            "name": toxic.name,
            "type": kind_name(toxic.kind),
            "stream": toxic.stream.value,
            "toxicity": toxic.toxicity,
            "attributes": attributes_as_dict(toxic.attributes),
        }
        data = self._request("POST", f"{_proxy_path(proxy_name)}/toxics", payload)
        return self._decode_toxic(data)

    def update_toxic(
        self,
        proxy_name: str,
        toxic_name: str,
        attributes: ToxicAttributes,
    ) -> Toxic:
        payload = {"attributes": attributes_as_dict(attributes)}
        data = self._request("POST", _toxic_path(proxy_name, toxic_name), payload)
        return self._decode_toxic(data)

    def remove_toxic(self, proxy_name: str, toxic_name: str) -> None:
        self._request("DELETE", _toxic_path(proxy_name, toxic_name))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        """Send one request and return the decoded JSON body (or ``None``)."""
        url = f"{self._base_url}{path}"
        logger.debug("{} {} {}", method, url, payload if payload is not None else "")

        try:
            response = self._session.request(method, url, json=payload)
        except requests.exceptions.ConnectionError as exc:
            raise ServiceConnectionError(
                f"Cannot connect to Toxiproxy at {self._base_url}: {exc}",
                hint="Is the server running? Point at it with --host or TOXIPROXY_URL.",
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise ServiceError(f"{method} {path} failed: {exc}") from exc

        logger.debug("{} {} -> {}", method, url, response.status_code)

        if not response.ok:
            self._raise_mapped(response)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise ServiceResponseError(
                f"{method} {path} returned invalid JSON: {exc}",
                status_code=response.status_code,
            ) from exc

    @classmethod
    def _raise_mapped(cls, response: requests.Response) -> None:
        """Translate a non-2xx response into a domain exception.

        Always raises.
        """
        message = response.text.strip() or response.reason or "request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])

        error_class = cls._STATUS_ERRORS.get(response.status_code, ServiceError)
        raise error_class(message, status_code=response.status_code)

    # ------------------------------------------------------------------
    # Raw-JSON → domain-model decoders
    # ------------------------------------------------------------------

    @classmethod
    def _decode_proxy(cls, data: Any) -> Proxy:
        try:
            toxics = [cls._decode_toxic(raw) for raw in data.get("toxics") or []]
            return Proxy(
                name=str(data["name"]),
                listen=str(data["listen"]),
                upstream=str(data["upstream"]),
                enabled=bool(data["enabled"]),
                toxics={toxic.name: toxic for toxic in toxics},
            )
        except ServiceResponseError:
            raise
        except (AttributeError, KeyError, TypeError) as exc:
            raise ServiceResponseError(f"Unexpected proxy payload from server: {exc!r}") from exc

    @staticmethod
    def _decode_toxic(data: Any) -> Toxic:
        try:
            name = str(data["name"])
            kind = parse_kind(str(data["type"]))
            values = {
                str(key): _decode_int(name, key, value)
                for key, value in (data.get("attributes") or {}).items()
            }
            extras: dict[str, int] = {}
            if isinstance(kind, ToxicKind):
                known = attribute_names(kind)
                extras = {key: value for key, value in values.items() if key not in known}
                attributes: ToxicAttributes = ATTRIBUTE_TYPES[kind](
                    **{key: value for key, value in values.items() if key in known}
                )
            else:
                attributes = GenericAttributes(values)
            # The server always sets a stream; anything but upstream is downstream.
            stream = Direction.UPSTREAM if data.get("stream") == "upstream" else Direction.DOWNSTREAM
            return Toxic(
                name=name,
                kind=kind,
                stream=stream,
                attributes=attributes,
                toxicity=float(data.get("toxicity", 1.0)),
                extras=extras,
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ServiceResponseError(f"Unexpected toxic payload from server: {exc!r}") from exc


def _decode_int(toxic_name: str, key: Any, value: Any) -> int:
    # bool is an int subclass; JSON true is not a toxic parameter.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ServiceResponseError(
            f"Toxic '{toxic_name}' reported a non-integer value for '{key}': {value!r}",
        )
    return value


def _proxy_path(name: str) -> str:
    return f"/proxies/{quote(name, safe='')}"


def _toxic_path(proxy_name: str, toxic_name: str) -> str:
    return f"{_proxy_path(proxy_name)}/toxics/{quote(toxic_name, safe='')}"
