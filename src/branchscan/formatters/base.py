"""Base formatter interface for branchscan output rendering."""

from abc import ABC, abstractmethod

from ..summary import AnalysisSummary


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, summary: AnalysisSummary) -> None:
        """Render the summary to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, summary: AnalysisSummary) -> str:
        """Return formatted string representation of the summary."""
