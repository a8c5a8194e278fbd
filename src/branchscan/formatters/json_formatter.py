"""JSON formatter for branchscan."""

import json

from ..summary import AnalysisSummary
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the summary as JSON."""

    def render(self, summary: AnalysisSummary) -> None:
        print(self.format(summary))

    def format(self, summary: AnalysisSummary) -> str:
        return json.dumps(summary.to_dict(), indent=2)
