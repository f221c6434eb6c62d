"""Presentation of proxies, toxics and command results.

All display-related logic lives here — no validation, no service calls.
Results go to stdout via :data:`~toxiproxy_cli.cli.console.out`; the
proxy table header goes to stderr so piped output stays row-only.
User-supplied text is always markup-escaped before printing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich.markup import escape

from toxiproxy_cli.cli.console import console, out
from toxiproxy_cli.core.classifier import split_by_direction
from toxiproxy_cli.core.models import Direction, Proxy, Toxic, kind_name

_TABLE_HEADERS: tuple[str, ...] = ("Listen", "Upstream", "Name", "Enabled", "Toxics")
_TABLE_STYLES: tuple[str, ...] = ("blue", "yellow", "", "magenta", "red")
_COLUMN_GAP = 2


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def enabled_style(enabled: bool) -> str:
    """Colour used for a proxy name: green when enabled, red otherwise."""
    return "green" if enabled else "red"


def enabled_text(enabled: bool) -> str:
    return "enabled" if enabled else "disabled"


def format_toxic_count(toxics: Mapping[str, Toxic]) -> str:
    """Render the number of toxics, ``"None"`` when there are none."""
    return str(len(toxics)) if toxics else "None"


def format_value(value: object) -> str:
    """Render a field value; floats drop a trailing ``.0``."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def format_toxic_line(toxic: Toxic) -> str:
    """Build the ``name: key=value key=value`` markup line for one toxic."""
    pairs = " ".join(
        f"{escape(key)}={escape(format_value(value))}"
        for key, value in toxic.fields().items()
    )
    return f"[green]{escape(toxic.name)}:[/green] {pairs}"


def _proxy_row(proxy: Proxy) -> tuple[str, ...]:
    return (
        proxy.listen,
        proxy.upstream,
        proxy.name,
        str(proxy.enabled).lower(),
        format_toxic_count(proxy.toxics),
    )


def _column_widths(rows: Sequence[tuple[str, ...]]) -> list[int]:
    widths = [len(header) for header in _TABLE_HEADERS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return [width + _COLUMN_GAP for width in widths]


def _styled(text: str, style: str, width: int | None = None) -> str:
    padded = text.ljust(width) if width is not None else text
    escaped = escape(padded)
    return f"[{style}]{escaped}[/{style}]" if style else escaped


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def render_hint(message: str) -> None:
    out.print(f"[cyan]Hint: {escape(message)}[/cyan]")


def render_proxy_table(proxies: Sequence[Proxy]) -> None:
    """Print the proxy table, or an explicit empty state with a hint.

    *proxies* is rendered in the order given; callers sort it.
    """
    rows = [_proxy_row(proxy) for proxy in proxies]
    widths = _column_widths(rows)

    header = "".join(
        _styled(title, style, width)
        for title, style, width in zip(_TABLE_HEADERS, _TABLE_STYLES, widths)
    )
    console.print(header.rstrip())
    console.print("=" * max(sum(widths), 80))

    if not proxies:
        out.print("[red]no proxies[/red]")
        out.print()
        render_hint("create a proxy with `toxiproxy-cli create`")
        return

    for proxy, row in zip(proxies, rows):
        styles = list(_TABLE_STYLES)
        styles[2] = enabled_style(proxy.enabled)
        line = "".join(
            _styled(cell, style, width if i < len(row) - 1 else None)
            for i, (cell, style, width) in enumerate(zip(row, styles, widths))
        )
        out.print(line)
    out.print()
    render_hint("inspect a proxy with `toxiproxy-cli inspect <proxyName>`")


def render_toxics(toxics: Mapping[str, Toxic], direction: Direction) -> None:
    """Print the toxics of one stream, sorted by name for stable output."""
    if not toxics:
        out.print(f"[red]no {direction.value} toxics[/red]")
        return
    out.print(f"{direction.value} toxics:")
    for name in sorted(toxics):
        out.print(format_toxic_line(toxics[name]))


def render_proxy(proxy: Proxy) -> None:
    """Print one proxy with its toxics split by stream."""
    style = enabled_style(proxy.enabled)
    out.print(f"proxy name: [{style}]{escape(proxy.name)}[/{style}]")
    out.print(
        f"listen: [blue]{escape(proxy.listen)}[/blue] "
        f"---> upstream: [yellow]{escape(proxy.upstream)}[/yellow]"
    )
    out.print()

    if not proxy.toxics:
        out.print("[red]no toxics[/red]")
    else:
        upstream, downstream = split_by_direction(proxy.toxics)
        render_toxics(upstream, Direction.UPSTREAM)
        out.print()
        render_toxics(downstream, Direction.DOWNSTREAM)
    out.print()

    render_hint("add a toxic with `toxiproxy-cli toxic add`")


# ---------------------------------------------------------------------------
# Command results
# ---------------------------------------------------------------------------

def render_toggled(proxy: Proxy) -> None:
    style = enabled_style(proxy.enabled)
    out.print(
        f"Proxy [{style}]{escape(proxy.name)}[/{style}] is now "
        f"[{style}]{enabled_text(proxy.enabled)}[/{style}]"
    )


def render_created(proxy: Proxy) -> None:
    out.print(f"Created new proxy {escape(proxy.name)}")


def render_deleted(name: str) -> None:
    out.print(f"Deleted proxy {escape(name)}")


def render_toxic_added(proxy_name: str, toxic: Toxic) -> None:
    out.print(
        f"Added {toxic.stream.value} {escape(kind_name(toxic.kind))} toxic "
        f"'{escape(toxic.name)}' on proxy '{escape(proxy_name)}'"
    )


def render_toxic_updated(proxy_name: str, toxic: Toxic) -> None:
    out.print(f"Updated toxic '{escape(toxic.name)}' on proxy '{escape(proxy_name)}'")


def render_toxic_removed(proxy_name: str, toxic_name: str) -> None:
    out.print(f"Removed toxic '{escape(toxic_name)}' on proxy '{escape(proxy_name)}'")
