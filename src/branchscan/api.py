"""Public API for branchscan.

Example:
    >>> from branchscan import analyze
    >>>
    >>> summary = analyze("/path/to/code")
    >>> summary.total_functions
    >>>
    >>> summary = analyze("/path/to/code", extensions=[".java", ".c"], top_n=5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .config import load_config
from .extractor import extract
from .logging_config import get_logger
from .models import Function
from .scanner import Scanner
from .summary import AnalysisSummary, summarize
from .tokenizer import tokenize

logger = get_logger(__name__)


def analyze(
    path: Union[str, Path] = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisSummary:
    """Scan a file or directory and summarize its functions.

    Args:
        path: File or directory to analyze (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., top_n=5, workers=2)

    Returns:
        AnalysisSummary for the run

    Raises:
        BranchScanError: If configuration or path is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Analyzing {path} with {config}")

    result = Scanner(path, config).scan()
    return summarize(
        result.functions,
        top_n=config.top_n,
        errors=result.errors,
        files_scanned=result.files_scanned,
    )


def extract_functions(text: str, source_file: Union[str, Path] = "<memory>") -> list[Function]:
    """Run the tokenize -> extract pipeline over in-memory source text."""
    return extract(tokenize(text), source_file)
