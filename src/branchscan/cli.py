"""Command-line interface for branchscan"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from . import __version__
from .api import analyze
from .exceptions import BranchScanError
from .formatters import JsonFormatter, RichFormatter, get_formatter
from .logging_config import setup_logging

app = typer.Typer(
    name="branchscan",
    help="branchscan - heuristic complexity and naming scanner for C-family code",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

VALID_FORMATS = ("rich", "json", "csv", "quiet")


def _normalize_extensions(extensions: Optional[List[str]]) -> Optional[List[str]]:
    if not extensions:
        return None
    return [ext if ext.startswith(".") else f".{ext}" for ext in extensions]


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Directory (scanned recursively) or single source file to analyze",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-t",
        help="Number of most complex functions to display (default: 3)",
        min=0,
        max=1000,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default), json, csv, quiet",
    ),
    extensions: Optional[List[str]] = typer.Option(
        None,
        "--extension",
        "-x",
        help="File suffix to analyze, repeatable (default: .java)",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the JSON summary to this file",
        dir_okay=False,
    ),
    fail_above: Optional[int] = typer.Option(
        None,
        "--fail-above",
        help="Exit 1 if any function's complexity exceeds this value (for CI gating)",
        min=0,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Score functions in C-family sources by branching keywords and check camelCase names.

    [bold cyan]Examples:[/bold cyan]

      branchscan src/main/java

      branchscan . -x .c -x .h --top 10

      branchscan . --format json | jq .top_functions

      branchscan . --fail-above 15 --format quiet
    """
    if version:
        console.print(f"[bold cyan]branchscan[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    if verbose and quiet:
        err_console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(1)

    if fmt not in VALID_FORMATS:
        err_console.print(
            f"[red]Error:[/red] --format must be one of: {', '.join(sorted(VALID_FORMATS))}"
        )
        raise typer.Exit(1)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        summary = analyze(
            path,
            config_file=config,
            top_n=top,
            extensions=_normalize_extensions(extensions),
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )

        formatter = RichFormatter(console=console) if fmt == "rich" else get_formatter(fmt)
        formatter.render(summary)

        if output is not None:
            try:
                output.write_text(JsonFormatter().format(summary) + "\n", encoding="utf-8")
            except OSError as e:
                raise BranchScanError(f"Cannot write output file {output}: {e}")
            logger.info(f"Wrote summary to {output}")

        if fail_above is not None and summary.max_complexity > fail_above:
            if fmt == "rich":
                console.print(
                    f"\n[red]FAIL:[/red] Max complexity {summary.max_complexity} "
                    f"exceeds threshold {fail_above}"
                )
            raise typer.Exit(1)

    except BranchScanError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    app()
