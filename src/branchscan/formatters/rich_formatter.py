"""Rich terminal formatter for branchscan."""

import io
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..summary import AnalysisSummary
from .base import BaseFormatter


def _score_label(score: int) -> str:
    if score >= 20:
        return f"[red bold]{score}[/red bold]"
    elif score >= 10:
        return f"[red]{score}[/red]"
    elif score >= 5:
        return f"[yellow]{score}[/yellow]"
    else:
        return f"[green]{score}[/green]"


class RichFormatter(BaseFormatter):
    """Rich terminal output: top-complexity table, totals and naming share."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, summary: AnalysisSummary) -> None:
        self._print(summary, self.console)

    def format(self, summary: AnalysisSummary) -> str:
        console = Console(file=io.StringIO(), record=True, width=100, color_system=None)
        self._print(summary, console)
        return console.export_text()

    def _print(self, summary: AnalysisSummary, console: Console) -> None:
        for entry in summary.unreadable_files:
            console.print(
                f"[yellow]Skipped unreadable file[/yellow] {escape(entry.path)}: "
                f"{escape(entry.reason)}"
            )

        if summary.status == "no_functions":
            console.print(
                f"[bold yellow]No functions found[/bold yellow] "
                f"in {summary.files_scanned} file(s)."
            )
            return

        table = Table(title="Highest complexity scores", title_justify="left")
        table.add_column("Score", justify="right")
        table.add_column("Function")
        for entry in summary.top_functions:
            table.add_row(_score_label(entry.score), escape(entry.function.display_name))
        console.print(table)

        if summary.status == "all_trivial":
            console.print(
                f"[green]All {summary.total_functions} functions have complexity 0.[/green]"
            )

        console.print(
            f"Functions analyzed: [bold]{summary.total_functions}[/bold] "
            f"in {summary.files_scanned} file(s)"
        )
        console.print(
            f"Functions not in camelCase: [bold]{summary.format_percentage()}%[/bold] "
            f"({summary.non_camel_case}/{summary.total_functions})"
        )
