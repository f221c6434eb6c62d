"""Domain models for toxiproxy-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction-time validation.  They
carry zero I/O and no dependencies on external packages.

A toxic is modelled as a tagged variant: :class:`ToxicKind` selects the
attribute record class, and every record field is an ``int``.  Name,
stream and toxicity live on :class:`Toxic` itself, outside the payload.

Servers may register kinds beyond :class:`ToxicKind` (a stock server
also ships ``noop``).  Such a kind is carried as its plain string name
with a :class:`GenericAttributes` record holding an open map of integer
parameters.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Union


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Direction(str, Enum):
    """The proxy stream a toxic is attached to."""

    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"


class ToxicKind(str, Enum):
    """Toxic types understood by the Toxiproxy server."""

    LATENCY = "latency"
    BANDWIDTH = "bandwidth"
    SLOW_CLOSE = "slow_close"
    TIMEOUT = "timeout"
    SLICER = "slicer"
    RESET_PEER = "reset_peer"
    LIMIT_DATA = "limit_data"


# ---------------------------------------------------------------------------
# Per-kind attribute records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LatencyAttributes:
    """Delay all data by ``latency`` ms, plus or minus ``jitter`` ms."""

    latency: int = 0
    jitter: int = 0


@dataclass(frozen=True, slots=True)
class BandwidthAttributes:
    """Limit the stream to ``rate`` KB/s."""

    rate: int = 0


@dataclass(frozen=True, slots=True)
class SlowCloseAttributes:
    """Delay the TCP close by ``delay`` ms."""

    delay: int = 0


@dataclass(frozen=True, slots=True)
class TimeoutAttributes:
    """Stop all data and close after ``timeout`` ms (``0`` never closes)."""

    timeout: int = 0


@dataclass(frozen=True, slots=True)
class SlicerAttributes:
    """Slice data into chunks, waiting ``delay`` microseconds between them."""

    average_size: int = 0
    size_variation: int = 0
    delay: int = 0


@dataclass(frozen=True, slots=True)
class ResetPeerAttributes:
    """Reset the connection with a TCP RST after ``timeout`` ms."""

    timeout: int = 0


@dataclass(frozen=True, slots=True)
class LimitDataAttributes:
    """Close the connection once ``bytes`` bytes have passed."""

    bytes: int = 0


@dataclass(frozen=True, slots=True)
class GenericAttributes:
    """Parameters of a kind this client has no typed record for."""

    values: dict[str, int] = field(default_factory=dict)


ToxicAttributes = Union[
    LatencyAttributes,
    BandwidthAttributes,
    SlowCloseAttributes,
    TimeoutAttributes,
    SlicerAttributes,
    ResetPeerAttributes,
    LimitDataAttributes,
    GenericAttributes,
]

ToxicType = Union[ToxicKind, str]
"""A known :class:`ToxicKind`, or the name of any other server-side kind."""

ATTRIBUTE_TYPES: dict[ToxicKind, type[ToxicAttributes]] = {
    ToxicKind.LATENCY: LatencyAttributes,
    ToxicKind.BANDWIDTH: BandwidthAttributes,
    ToxicKind.SLOW_CLOSE: SlowCloseAttributes,
    ToxicKind.TIMEOUT: TimeoutAttributes,
    ToxicKind.SLICER: SlicerAttributes,
    ToxicKind.RESET_PEER: ResetPeerAttributes,
    ToxicKind.LIMIT_DATA: LimitDataAttributes,
}
"""Maps every :class:`ToxicKind` to its attribute record class."""


def parse_kind(raw: str) -> ToxicType:
    """Return the :class:`ToxicKind` named *raw*, or *raw* itself if unknown."""
    try:
        return ToxicKind(raw)
    except ValueError:
        return raw


def kind_name(kind: ToxicType) -> str:
    """The wire name of *kind* (``"latency"``, ``"noop"``, ...)."""
    return kind.value if isinstance(kind, ToxicKind) else kind


def attribute_names(kind: ToxicKind) -> tuple[str, ...]:
    """Return the parameter names accepted by *kind*, in declaration order."""
    return tuple(f.name for f in fields(ATTRIBUTE_TYPES[kind]))


def attributes_as_dict(attributes: ToxicAttributes) -> dict[str, int]:
    """Flatten an attribute record into a plain ``{name: value}`` dict."""
    if isinstance(attributes, GenericAttributes):
        return dict(attributes.values)
    return asdict(attributes)


def _check_variant(kind: ToxicType, attributes: ToxicAttributes, toxicity: float) -> None:
    if not kind:
        raise ValueError("toxic type must not be empty")
    expected = ATTRIBUTE_TYPES[kind] if isinstance(kind, ToxicKind) else GenericAttributes
    if not isinstance(attributes, expected):
        raise TypeError(
            f"{kind_name(kind)} toxic requires {expected.__name__}, "
            f"got {type(attributes).__name__}",
        )
    if not 0.0 <= toxicity <= 1.0:
        raise ValueError(f"Toxicity must be between 0.0 and 1.0, got {toxicity}")


# ---------------------------------------------------------------------------
# Toxics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToxicSpec:
    """A request to attach a toxic to one stream of a proxy.

    An empty ``name`` asks the server to pick one
    (``<type>_<stream>`` on a stock Toxiproxy).
    """

    name: str
    kind: ToxicType
    stream: Direction
    attributes: ToxicAttributes
    toxicity: float = 1.0

    def __post_init__(self) -> None:
        # A plain "latency" string still selects the typed record.
        object.__setattr__(self, "kind", parse_kind(self.kind))
        _check_variant(self.kind, self.attributes, self.toxicity)


@dataclass(frozen=True, slots=True)
class Toxic:
    """A toxic as reported by the server.

    ``extras`` keeps integer parameters the server reported for a known
    kind that its typed record has no field for.
    """

    name: str
    kind: ToxicType
    stream: Direction
    attributes: ToxicAttributes
    toxicity: float = 1.0
    extras: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", parse_kind(self.kind))
        _check_variant(self.kind, self.attributes, self.toxicity)

    def fields(self) -> dict[str, object]:
        """Return the flat property view used for display.

        Reserved keys come first (``type``, ``stream``, ``toxicity``),
        followed by the kind-specific parameters, then any extras.
        """
        flat: dict[str, object] = {
            "type": kind_name(self.kind),
            "stream": self.stream.value,
            "toxicity": self.toxicity,
        }
        flat.update(attributes_as_dict(self.attributes))
        for key, value in self.extras.items():
            flat.setdefault(key, value)
        return flat


# ---------------------------------------------------------------------------
# Proxies
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Proxy:
    """A named relay from ``listen`` to ``upstream``."""

    name: str
    listen: str
    upstream: str
    enabled: bool
    toxics: dict[str, Toxic] = field(default_factory=dict)
    """Active toxics keyed by toxic name."""
