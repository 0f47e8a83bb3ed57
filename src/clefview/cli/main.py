"""
Main CLI entry point for clefview.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from clefview import __version__

console = Console()
error_console = Console(stderr=True)

ENCODINGS = ["compact", "verbose"]


def _configure_logging(verbose: bool) -> None:
    """Route clefview's library loggers to a Rich handler on stderr."""
    logger = logging.getLogger("clefview")
    if verbose:
        handler = RichHandler(console=error_console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.handlers = [handler]
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="clefview")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    clefview - structured log viewer

    Load CLEF and verbose JSON log files, summarize them, and filter
    entries by level, text and date range.

    Examples:

    \b
        clefview summary app.clef
        clefview levels app.clef
        clefview filter --level Error app.clef
        clefview filter --search "disk" --output json app.clef
        clefview filter --from 2024-01-01 --to 2024-01-02 app.clef
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = console
    ctx.obj["error_console"] = error_console


@cli.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--encoding", "-e",
    type=click.Choice(ENCODINGS),
    help="Force a record encoding (skip per-record detection)"
)
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)"
)
@click.pass_context
def summary(
    ctx: click.Context,
    files: tuple[str, ...],
    encoding: str | None,
    output_format: str,
) -> None:
    """
    Summarize log files: entry count, levels and date range.

    Examples:

    \b
        clefview summary app.clef
        clefview summary --output json *.clef
    """
    from clefview.cli.commands import summary_command

    exit_code = summary_command(
        files=files,
        encoding=encoding,
        output_format=output_format,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--encoding", "-e",
    type=click.Choice(ENCODINGS),
    help="Force a record encoding (skip per-record detection)"
)
@click.pass_context
def levels(ctx: click.Context, file: str, encoding: str | None) -> None:
    """
    List the levels used in a file, in order of first appearance.
    """
    from clefview.cli.commands import levels_command

    exit_code = levels_command(
        file_path=file,
        encoding=encoding,
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


@cli.command(name="filter")
@click.argument("file", type=click.Path(exists=True))
@click.option(
    "--encoding", "-e",
    type=click.Choice(ENCODINGS),
    help="Force a record encoding (skip per-record detection)"
)
@click.option(
    "--level", "-l", "levels", multiple=True,
    help="Keep entries with this exact level (repeatable)"
)
@click.option(
    "--search", "-s", default="",
    help="Case-insensitive text to find in message, template or level"
)
@click.option("--from", "start", help="Earliest timestamp to keep (inclusive)")
@click.option("--to", "end", help="Latest timestamp to keep (inclusive)")
@click.option(
    "--offset", type=click.IntRange(min=0), default=0,
    help="Skip this many matching entries"
)
@click.option(
    "--limit", "-n", type=click.IntRange(min=0),
    help="Limit number of entries to display"
)
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(["table", "json", "compact"]),
    default="table",
    help="Output format (default: table)"
)
@click.option(
    "--worker/--no-worker", default=False,
    help="Run the filter in a separate worker process"
)
@click.pass_context
def filter_(
    ctx: click.Context,
    file: str,
    encoding: str | None,
    levels: tuple[str, ...],
    search: str,
    start: str | None,
    end: str | None,
    offset: int,
    limit: int | None,
    output_format: str,
    worker: bool,
) -> None:
    """
    Filter the entries of a log file.

    All given filters must match (logical AND).

    Examples:

    \b
        clefview filter --level Error --level Fatal app.clef
        clefview filter --search timeout --output compact app.clef
        clefview filter --from 2024-01-01T00:00:00Z --to 2024-01-02T00:00:00Z app.clef
        clefview filter --worker --search disk huge.clef
    """
    from clefview.cli.commands import filter_command

    exit_code = filter_command(
        file_path=file,
        encoding=encoding,
        levels=levels,
        search=search,
        start=start,
        end=end,
        offset=offset,
        limit=limit,
        output_format=output_format,
        use_worker=worker,
        quiet=ctx.obj.get("quiet", False),
        console=ctx.obj["console"],
        error_console=ctx.obj["error_console"],
    )
    ctx.exit(exit_code)


if __name__ == "__main__":
    cli()
