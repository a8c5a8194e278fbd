"""Exception hierarchy for branchscan."""

from .analysis import AnalysisError, FileAccessError
from .base import BranchScanError
from .config import ConfigurationError, InvalidConfigError, InvalidPathError

__all__ = [
    "BranchScanError",
    "AnalysisError",
    "FileAccessError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
