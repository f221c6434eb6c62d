"""Partition a proxy's toxics by stream for display."""

from __future__ import annotations

from collections.abc import Mapping

from toxiproxy_cli.core.models import Direction, Toxic


def split_by_direction(
    toxics: Mapping[str, Toxic],
) -> tuple[dict[str, Toxic], dict[str, Toxic]]:
    """Return ``(upstream, downstream)`` subsets of *toxics*.

    Every toxic lands in exactly one subset: upstream toxics in the
    first, everything else in the second.  The input is not modified.
    """
    upstream: dict[str, Toxic] = {}
    downstream: dict[str, Toxic] = {}
    for name, toxic in toxics.items():
        if toxic.stream is Direction.UPSTREAM:
            upstream[name] = toxic
        else:
            downstream[name] = toxic
    return upstream, downstream
