"""
Terminal rendering of entries and file summaries.
"""

import json
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clefview.core.models import LogEntry, LogFileInfo

__all__ = [
    "level_style",
    "render_entries",
    "render_table",
    "render_json",
    "render_compact",
    "render_summaries",
]


# Level color mapping for Rich, keyed by lower-cased level prefix
LEVEL_STYLES = {
    "fatal": "red bold reverse",
    "crit": "red bold",
    "err": "red",
    "warn": "yellow",
    "info": "green",
    "debug": "dim",
    "verbose": "dim italic",
    "trace": "dim italic",
}


def level_style(level: str) -> str:
    """Rich style for a free-form level label."""
    lowered = level.lower()
    for prefix, style in LEVEL_STYLES.items():
        if lowered.startswith(prefix):
            return style
    return "white"


def render_entries(
    entries: list[LogEntry],
    output_format: str,
    console: Console,
) -> None:
    """
    Render entries in the specified format.

    Args:
        entries: Entries to print, in order
        output_format: One of "table", "json", "compact"
        console: Rich Console for output
    """
    match output_format:
        case "json":
            render_json(entries, console)
        case "compact":
            render_compact(entries, console)
        case _:
            render_table(entries, console)


def render_table(entries: list[LogEntry], console: Console) -> None:
    """Time / level / message table; the first exception line is shown under its message."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Time", style="dim", width=20)
    table.add_column("Level", width=12)
    table.add_column("Message", overflow="fold")

    for entry in entries:
        style = level_style(entry.level)
        level_str = f"[{style}]{escape(entry.level)}[/{style}]"

        message = entry.message
        if len(message) > 200:
            message = message[:197] + "..."
        message = escape(message)
        if entry.exception:
            message += f"\n[red]{escape(entry.exception.splitlines()[0])}[/red]"

        table.add_row(entry.formatted_timestamp(), level_str, message)

    console.print(table)
    console.print(f"\n[dim]Total: {len(entries)} entries[/dim]")


def render_json(entries: list[LogEntry], console: Console) -> None:
    """Entries as a JSON array in the verbose entry shape."""
    output = [entry.to_dict() for entry in entries]
    console.print(json.dumps(output, indent=2, default=str), highlight=False, markup=False, soft_wrap=True)


def render_compact(entries: list[LogEntry], console: Console) -> None:
    """One line per entry: time of day, padded level, message."""
    for entry in entries:
        ts = entry.formatted_timestamp("%H:%M:%S") if entry.parsed_timestamp else "--------"
        level = escape(entry.level[:5].ljust(5))
        style = level_style(entry.level)
        console.print(
            f"[dim]{ts}[/dim] [{style}]{level}[/{style}] {escape(entry.message)}",
            highlight=False,
        )


def render_summaries(
    infos: list[LogFileInfo],
    output_format: str,
    console: Console,
) -> None:
    """Render per-file summaries as a table or JSON."""
    if output_format == "json":
        output = [info.to_dict() for info in infos]
        console.print(json.dumps(output, indent=2), highlight=False, markup=False, soft_wrap=True)
        return

    table = Table(title="Log Files")
    table.add_column("File", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("Levels", style="green")
    table.add_column("Date Range")

    for info in infos:
        date_range = "-"
        if info.date_range:
            start = info.date_range[0].strftime("%Y-%m-%d %H:%M:%S")
            end = info.date_range[1].strftime("%Y-%m-%d %H:%M:%S")
            date_range = f"{start} - {end}"
        table.add_row(
            Path(info.path).name,
            str(info.total_count),
            ", ".join(info.log_levels),
            date_range,
        )

    console.print(table)
