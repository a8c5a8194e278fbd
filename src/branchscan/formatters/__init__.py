"""Output formatters for branchscan."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .quiet_formatter import QuietFormatter
from .rich_formatter import RichFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "rich", "json", "csv", "quiet"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "rich": RichFormatter,
        "json": JsonFormatter,
        "csv": CsvFormatter,
        "quiet": QuietFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "QuietFormatter",
    "get_formatter",
]
