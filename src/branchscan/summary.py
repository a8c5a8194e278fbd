"""Aggregate statistics over extracted functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Sequence

from .exceptions import FileAccessError
from .models import Function

SummaryStatus = Literal["ok", "all_trivial", "no_functions"]

DEFAULT_TOP_N = 3


@dataclass(frozen=True)
class ScoredFunction:
    """A function paired with its complexity score."""

    function: Function
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "function": self.function.display_name}


@dataclass(frozen=True)
class UnreadableFile:
    """A file excluded from the statistics because it could not be read."""

    path: str
    reason: str


@dataclass(frozen=True)
class AnalysisSummary:
    """Report-ready view of one run.

    Attributes:
        total_functions: Number of functions found
        top_functions: Highest-complexity functions, descending, ties in encounter order
        non_camel_case: Number of function names failing the camelCase check
        max_complexity: Highest complexity score (0 without functions)
        files_scanned: Files that were read successfully
        unreadable_files: Files skipped because they could not be read
        functions: Every function, in encounter order
    """

    total_functions: int
    top_functions: List[ScoredFunction]
    non_camel_case: int
    max_complexity: int
    files_scanned: int = 0
    unreadable_files: List[UnreadableFile] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list, repr=False)

    @property
    def non_camel_case_percentage(self) -> float:
        if self.total_functions == 0:
            return 0.0
        return 100.0 * self.non_camel_case / self.total_functions

    def format_percentage(self) -> str:
        """Non-camelCase share with two decimals, e.g. ``'33.33'``."""
        return f"{self.non_camel_case_percentage:.2f}"

    @property
    def status(self) -> SummaryStatus:
        if self.total_functions == 0:
            return "no_functions"
        if self.max_complexity == 0:
            return "all_trivial"
        return "ok"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "files_scanned": self.files_scanned,
            "total_functions": self.total_functions,
            "non_camel_case": self.non_camel_case,
            "non_camel_case_percentage": self.format_percentage(),
            "max_complexity": self.max_complexity,
            "top_functions": [entry.to_dict() for entry in self.top_functions],
            "unreadable_files": [
                {"path": entry.path, "reason": entry.reason} for entry in self.unreadable_files
            ],
        }


def rank_by_complexity(functions: Sequence[Function]) -> List[ScoredFunction]:
    """All functions by descending complexity; sorted() is stable so ties keep order."""
    scored = [ScoredFunction(function=fn, score=fn.complexity()) for fn in functions]
    return sorted(scored, key=lambda entry: entry.score, reverse=True)


def summarize(
    functions: Sequence[Function],
    top_n: int = DEFAULT_TOP_N,
    errors: Iterable[FileAccessError] = (),
    files_scanned: int = 0,
) -> AnalysisSummary:
    """
    Build the run summary.

    Args:
        functions: Functions in encounter order
        top_n: How many of the most complex functions to keep
        errors: Read errors of files excluded from the statistics
        files_scanned: Number of files successfully read

    Returns:
        AnalysisSummary
    """
    if top_n < 0:
        raise ValueError("top_n must be non-negative")

    ranked = rank_by_complexity(functions)
    non_camel = sum(1 for fn in functions if not fn.is_camel_case())

    return AnalysisSummary(
        total_functions=len(functions),
        top_functions=ranked[:top_n],
        non_camel_case=non_camel,
        max_complexity=ranked[0].score if ranked else 0,
        files_scanned=files_scanned,
        unreadable_files=[UnreadableFile(path=str(e.filepath), reason=e.reason) for e in errors],
        functions=list(functions),
    )
