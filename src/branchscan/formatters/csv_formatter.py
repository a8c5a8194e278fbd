"""CSV formatter for branchscan."""

import csv
import io

from ..summary import AnalysisSummary
from .base import BaseFormatter


class CsvFormatter(BaseFormatter):
    """Render every function as one CSV row."""

    def render(self, summary: AnalysisSummary) -> None:
        print(self.format(summary), end="")

    def format(self, summary: AnalysisSummary) -> str:
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["file", "line", "function", "complexity", "camel_case"])
        for fn in summary.functions:
            writer.writerow([
                str(fn.source_file), fn.line, fn.name.text,
                fn.complexity(), str(fn.is_camel_case()).lower(),
            ])
        return output.getvalue()
