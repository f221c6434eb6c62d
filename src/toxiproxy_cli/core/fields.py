"""Pure parsing and validation of toxic field strings.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.

Pipeline used by the command layer:

1. :func:`parse_fields` — ``"latency=100,jitter=50"`` to ``{str: int}``.
2. :func:`resolve_kind` — ``"latency"`` to :class:`ToxicKind` (other names pass through).
3. :func:`build_attributes` / :func:`merge_attributes` — check the keys
   against the kind and produce its typed attribute record.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping

from toxiproxy_cli.core.models import (
    ATTRIBUTE_TYPES,
    GenericAttributes,
    ToxicAttributes,
    ToxicKind,
    ToxicType,
    attribute_names,
    parse_kind,
)
from toxiproxy_cli.exceptions import (
    FieldFormatError,
    FieldValueError,
    InvalidToxicTypeError,
    UnknownToxicFieldError,
)

_INTEGER = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# 1. Parse
# ---------------------------------------------------------------------------

def parse_fields(raw: str) -> dict[str, int]:
    """Parse a ``key=value,key=value`` string into integer fields.

    Each pair is split on its **first** ``=``.  When a key repeats, the
    last occurrence wins.

    Raises
    ------
    FieldFormatError
        If any pair lacks an ``=`` (this includes the empty string).
    FieldValueError
        If any value is not a signed base-10 integer.
    """
    parsed: dict[str, int] = {}
    for pair in raw.split(","):
        key, sep, value = pair.partition("=")
        if not sep:
            raise FieldFormatError(
                "Fields must be in the format key=value,key=value",
                hint="Example: -f latency=100,jitter=50",
            )
        if _INTEGER.fullmatch(value) is None:
            raise FieldValueError(
                f"Toxic field '{key}' was expected to be an integer, got '{value}'",
            )
        parsed[key] = int(value)
    return parsed


# ---------------------------------------------------------------------------
# 2. Kind lookup
# ---------------------------------------------------------------------------

def resolve_kind(raw: str) -> ToxicType:
    """Map a ``--type`` value to a :class:`ToxicKind`.

    Names this client has no record for are returned unchanged; the
    server decides whether it knows them.
    """
    name = raw.strip()
    if not name:
        known = ", ".join(kind.value for kind in ToxicKind)
        raise InvalidToxicTypeError(
            "Toxic type must not be empty",
            hint=f"Known types: {known}",
        )
    return parse_kind(name)


# ---------------------------------------------------------------------------
# 3. Typed attributes
# ---------------------------------------------------------------------------

def _check_keys(kind: ToxicKind, fields: Mapping[str, int]) -> None:
    allowed = attribute_names(kind)
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise UnknownToxicFieldError(
            f"{kind.value} toxic has no field(s): {', '.join(unknown)}",
            hint=f"Valid {kind.value} fields: {', '.join(allowed)}",
        )


def build_attributes(kind: ToxicType, fields: Mapping[str, int]) -> ToxicAttributes:
    """Build the attribute record for *kind*; omitted fields default to 0.

    Any field name is accepted for a kind without a typed record.
    """
    if not isinstance(kind, ToxicKind):
        return GenericAttributes(dict(fields))
    _check_keys(kind, fields)
    return ATTRIBUTE_TYPES[kind](**fields)


def merge_attributes(
    kind: ToxicType,
    existing: ToxicAttributes,
    fields: Mapping[str, int],
) -> ToxicAttributes:
    """Overwrite only the given *fields* of an existing attribute record."""
    if isinstance(existing, GenericAttributes):
        return GenericAttributes({**existing.values, **fields})
    _check_keys(kind, fields)
    return dataclasses.replace(existing, **fields)
