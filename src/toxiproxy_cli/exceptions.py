"""Custom exception hierarchy for toxiproxy-cli.

All exceptions that cross layer boundaries must inherit from
:class:`ToxiproxyCliError`.  Raw ``requests`` exceptions must NEVER
propagate beyond the infrastructure layer — they are caught there and
re-raised as a typed subclass defined here.

Hierarchy
---------
ToxiproxyCliError
├── InputError
│   ├── MissingArgumentError
│   ├── FieldFormatError
│   ├── FieldValueError
│   ├── InvalidToxicTypeError
│   └── UnknownToxicFieldError
├── ServiceError
│   ├── NotFoundError
│   ├── ConflictError
│   ├── ServiceConnectionError
│   └── ServiceResponseError
├── ToxicNotFoundError
└── PartialToxicAddError
"""

from __future__ import annotations


class ToxiproxyCliError(Exception):
    """Base exception for all toxiproxy-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class InputError(ToxiproxyCliError):
    """Raised when command-line input is rejected before any service call."""


class MissingArgumentError(InputError):
    """Raised when a required positional argument or flag is empty."""


class FieldFormatError(InputError):
    """Raised when a toxic field string is not ``key=value,key=value``."""


class FieldValueError(InputError):
    """Raised when a toxic field value is not a base-10 integer."""


class InvalidToxicTypeError(InputError):
    """Raised when ``--type`` does not name a toxic kind at all."""


class UnknownToxicFieldError(InputError):
    """Raised when a field does not belong to the toxic's kind."""


# --- Administration service ------------------------------------------------

class ServiceError(ToxiproxyCliError):
    """Raised when the Toxiproxy server rejects or fails a request."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.status_code: int | None = status_code
        """HTTP status reported by the server, if a response was received."""


class NotFoundError(ServiceError):
    """Raised when the requested proxy or toxic does not exist."""


class ConflictError(ServiceError):
    """Raised when a proxy or toxic with the same name already exists."""


class ServiceConnectionError(ServiceError):
    """Raised when the Toxiproxy server cannot be reached."""


class ServiceResponseError(ServiceError):
    """Raised when the server returns a payload that cannot be decoded."""


# --- Toxic operations ------------------------------------------------------

class ToxicNotFoundError(ToxiproxyCliError):
    """Raised when a named toxic is not attached to the proxy."""


class PartialToxicAddError(ToxiproxyCliError):
    """Raised when a multi-direction add fails after an earlier add succeeded.

    Earlier additions are **not** rolled back; :attr:`added` lists them so
    the caller can report exactly what is now active on the proxy.
    """

    def __init__(
        self,
        message: str,
        *,
        added: tuple[str, ...],
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.added: tuple[str, ...] = added
        """Descriptions of the toxics that were added before the failure."""
