"""Configuration loading and management for branchscan.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.branchscan.toml)
    3. Project config (./branchscan.toml)
    4. Explicit config file
    5. Environment variables (BRANCHSCAN_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, top_n=5)
    >>> config.verbosity
    'verbose'
    >>> config.top_n
    5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import BranchScanError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for a scan.

    Attributes:
        File selection:
            extensions: File suffixes to analyze (default: Java sources)
            exclude_patterns: Glob patterns to exclude from analysis
            max_file_size_mb: Maximum file size to analyze (MB)
            max_files: Maximum number of files to analyze
            allow_hidden_files: Include files under dot-directories
            follow_symlinks: Follow symbolic links during scanning

        Performance tuning:
            workers: Number of parallel workers (None = auto-detect)
            timeout_seconds: Timeout for reading one file

        Output control:
            top_n: Number of most complex functions to report
            verbosity: Logging verbosity level
    """

    # File selection
    extensions: list[str] = field(default_factory=lambda: [".java"])
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "build/*",
            "target/*",
            "out/*",
            "node_modules/*",
            "vendor/*",
            ".git/*",
            "*.min.js",
            "*.generated.*",
        ]
    )
    max_file_size_mb: float = 10.0
    max_files: int = 10000
    allow_hidden_files: bool = False
    follow_symlinks: bool = False

    # Performance tuning
    workers: Optional[int] = None  # None = auto-detect from CPU cores
    timeout_seconds: int = 10

    # Output control
    top_n: int = 3
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extensions:
            raise ValueError("extensions must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise ValueError(f"extension must start with '.', got {ext!r}")

        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.max_files < 1:
            raise ValueError("max_files must be at least 1")

        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.timeout_seconds < 1:
            raise ValueError("timeout_seconds must be at least 1")

        if self.top_n < 0:
            raise ValueError("top_n must be non-negative")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError(f"verbosity must be quiet, normal or verbose, got {self.verbosity!r}")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored

    Returns:
        Validated AnalysisConfig instance

    Raises:
        BranchScanError: If a config file or value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".branchscan.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise BranchScanError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "branchscan.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise BranchScanError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise BranchScanError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise BranchScanError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Verbosity boolean flags map onto the verbosity field
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update(overrides)

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise BranchScanError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from BRANCHSCAN_* environment variables.

    Supported environment variables:
        BRANCHSCAN_EXTENSIONS: comma-separated suffixes (".java,.c")
        BRANCHSCAN_MAX_FILE_SIZE_MB: float
        BRANCHSCAN_MAX_FILES: int
        BRANCHSCAN_ALLOW_HIDDEN_FILES: bool (true/false/1/0)
        BRANCHSCAN_FOLLOW_SYMLINKS: bool
        BRANCHSCAN_WORKERS: int
        BRANCHSCAN_TIMEOUT_SECONDS: int
        BRANCHSCAN_TOP_N: int
        BRANCHSCAN_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any BRANCHSCAN_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"BRANCHSCAN_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if can't parse

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Lists are comma-separated
    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML as dict; a ``[tool.branchscan]`` or ``[branchscan]``
        table is unwrapped if present
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        data = tomllib.load(f)

    if isinstance(data.get("tool"), dict) and "branchscan" in data["tool"]:
        return dict(data["tool"]["branchscan"])
    if isinstance(data.get("branchscan"), dict):
        return dict(data["branchscan"])
    return data


default_config = AnalysisConfig()
