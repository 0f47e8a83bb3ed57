"""
CLI commands using the application layer use cases.

This module provides the CLI command implementations that wire up
the infrastructure adapters to the application use cases.
"""

from pathlib import Path

from rich.console import Console

from clefview.application.load_log import LoadLogFileUseCase
from clefview.cli.output import render_entries, render_summaries
from clefview.core.exceptions import ClefViewError
from clefview.core.models import FilterSpec, LoadResult, LogEntry, paginate
from clefview.engine.filters import filter_entries
from clefview.infrastructure import FileStreamSource
from clefview.parsers import registry
from clefview.worker import FilterWorkerClient

__all__ = ["load_command_result", "summary_command", "levels_command", "filter_command"]


def load_command_result(
    file_path: str,
    encoding: str | None,
    quiet: bool,
    error_console: Console,
) -> LoadResult:
    """
    Load one file, reporting skipped records unless quiet.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    use_case = LoadLogFileUseCase(
        source=FileStreamSource(file_path),
        normalizer=registry,
        encoding=encoding,
    )
    result = use_case.execute()

    if result.skipped_count and not quiet:
        error_console.print(
            f"[yellow]{Path(file_path).name}:[/yellow] "
            f"skipped {result.skipped_count} malformed record(s)"
        )
    return result


def summary_command(
    files: tuple[str, ...],
    encoding: str | None,
    output_format: str,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the summary command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    if not files:
        error_console.print("[red]Error:[/red] No files specified")
        return 1

    infos = []
    for file_path in files:
        try:
            infos.append(load_command_result(file_path, encoding, quiet, error_console).info)
        except FileNotFoundError as e:
            error_console.print(f"[red]Error:[/red] {e}")
            continue

    if not infos:
        return 1

    render_summaries(infos, output_format, console)
    return 0


def levels_command(
    file_path: str,
    encoding: str | None,
    console: Console,
    error_console: Console,
) -> int:
    """
    Print the distinct levels of a file in order of first appearance.

    Returns:
        Exit code
    """
    try:
        result = load_command_result(file_path, encoding, True, error_console)
    except FileNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    for level in result.info.log_levels:
        console.print(level, highlight=False, markup=False)
    return 0


def filter_command(
    file_path: str,
    encoding: str | None,
    levels: tuple[str, ...],
    search: str,
    start: str | None,
    end: str | None,
    offset: int,
    limit: int | None,
    output_format: str,
    use_worker: bool,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the filter command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    if (start is None) != (end is None):
        error_console.print("[red]Error:[/red] --from and --to must be given together")
        return 1

    spec = FilterSpec(
        selected_levels=frozenset(levels),
        search_text=search,
        date_range=(start, end) if start is not None else None,
    )

    try:
        result = load_command_result(file_path, encoding, quiet, error_console)
        entries = _apply_filter(result.entries, spec, use_worker)
        entries = paginate(entries, offset, limit)
    except FileNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1
    except ClefViewError as e:
        error_console.print(f"[red]Filter error:[/red] {e.message}")
        return 1

    if entries:
        render_entries(entries, output_format, console)
    elif not quiet:
        console.print("[yellow]No matching log entries found.[/yellow]")

    return 0


def _apply_filter(entries: list[LogEntry], spec: FilterSpec, use_worker: bool) -> list[LogEntry]:
    if not use_worker:
        return filter_entries(entries, spec)

    with FilterWorkerClient(executor="process") as client:
        response = client.filter(entries, spec)

    if not response.ok:
        raise ClefViewError(response.error)
    return response.entries()
