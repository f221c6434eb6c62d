"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Toxiproxy HTTP API.  Every
raw ``requests`` exception must be caught here and re-raised as a
:class:`~toxiproxy_cli.exceptions.ServiceError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from toxiproxy_cli.infra.http_client import ToxiproxyHttpClient

__all__: list[str] = ["ToxiproxyHttpClient"]
