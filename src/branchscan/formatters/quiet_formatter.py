"""Quiet formatter: top function names only."""

from ..summary import AnalysisSummary
from .base import BaseFormatter


class QuietFormatter(BaseFormatter):
    """Render the top functions' display names, one per line."""

    def render(self, summary: AnalysisSummary) -> None:
        text = self.format(summary)
        if text:
            print(text)

    def format(self, summary: AnalysisSummary) -> str:
        return "\n".join(entry.function.display_name for entry in summary.top_functions)
