"""File discovery and the per-file tokenize -> extract pipeline.

Each file is processed independently, so files fan out over a thread pool.
Results are collected only after every worker is done and are ordered by
file path, which keeps reports reproducible regardless of completion order.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import AnalysisConfig, default_config
from .exceptions import FileAccessError, InvalidPathError
from .extractor import extract
from .file_ops import is_hidden, should_skip_file
from .logging_config import get_logger
from .models import Function
from .tokenizer import tokenize_file

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# Below this many files the pool overhead is not worth it
_PARALLEL_THRESHOLD = 10


@dataclass(frozen=True)
class FileResult:
    """Outcome of the pipeline for one file."""

    path: Path
    functions: list[Function] = field(default_factory=list)
    error: Optional[FileAccessError] = None


@dataclass
class ScanResult:
    """Aggregated outcome of a scan.

    Attributes:
        files_scanned: Files read and tokenized successfully
        functions: All functions, ordered by file path then position
        errors: Read errors of files excluded from the results
    """

    files_scanned: int = 0
    functions: list[Function] = field(default_factory=list)
    errors: list[FileAccessError] = field(default_factory=list)


def process_file(path: Path, timeout_seconds: int = 10) -> FileResult:
    """Run tokenizer and extractor over one file."""
    tokenized = tokenize_file(path, timeout_seconds=timeout_seconds)
    if tokenized.error is not None:
        return FileResult(path=tokenized.path, error=tokenized.error)
    return FileResult(path=tokenized.path, functions=extract(tokenized.tokens, tokenized.path))


class Scanner:
    """Discovers C-family source files under a root and extracts their functions."""

    def __init__(self, root: Union[str, Path], config: Optional[AnalysisConfig] = None):
        """
        Initialize scanner.

        Args:
            root: Directory to scan recursively, or a single file
            config: Analysis configuration

        Raises:
            InvalidPathError: If root does not exist
        """
        self.root = Path(root)
        self.config = config or default_config
        if not self.root.exists():
            raise InvalidPathError(self.root, "path does not exist")
        logger.debug(f"Initialized {self.__class__.__name__} for {self.root}")

    def discover(self) -> list[Path]:
        """
        List the files to analyze, sorted by path.

        Returns:
            Source files matching the configured extensions and filters
        """
        if self.root.is_file():
            return [self.root]

        files: list[Path] = []
        ext_set = set(self.config.extensions)
        skipped = 0

        for filepath in self._walk():
            if filepath.suffix not in ext_set:
                continue

            if len(files) >= self.config.max_files:
                logger.warning(f"Reached max files limit ({self.config.max_files})")
                break

            if not self.config.allow_hidden_files and is_hidden(filepath, self.root):
                skipped += 1
                logger.debug(f"Skipped (hidden): {filepath}")
                continue

            rel_path = filepath.relative_to(self.root)
            if should_skip_file(rel_path, self.config.exclude_patterns):
                skipped += 1
                logger.debug(f"Skipped (pattern): {filepath}")
                continue

            try:
                size = filepath.stat().st_size
            except OSError as e:
                logger.warning(f"Cannot stat {filepath}: {e}")
                continue
            if size > self.config.max_file_size_bytes:
                skipped += 1
                logger.debug(f"Skipped (size): {filepath} ({size} bytes)")
                continue

            files.append(filepath)

        logger.debug(f"Discovered {len(files)} files, skipped {skipped}")
        return sorted(files)

    def _walk(self) -> Iterator[Path]:
        """Yield regular files under root in a deterministic order.

        With ``follow_symlinks`` each real directory is entered once, so a
        link back to an ancestor does not loop.
        """
        seen_dirs: set[tuple[int, int]] = set()
        seen_files: set[Path] = set()

        for dirpath, dirnames, filenames in os.walk(
            self.root, followlinks=self.config.follow_symlinks
        ):
            if self.config.follow_symlinks:
                try:
                    st = os.stat(dirpath)
                except OSError as e:
                    logger.warning(f"Cannot stat {dirpath}: {e}")
                    dirnames[:] = []
                    continue
                key = (st.st_dev, st.st_ino)
                if key in seen_dirs:
                    logger.debug(f"Skipped (already visited): {dirpath}")
                    dirnames[:] = []
                    continue
                seen_dirs.add(key)

            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if path.is_symlink() and not self.config.follow_symlinks:
                    continue
                if not path.is_file():
                    continue
                if self.config.follow_symlinks:
                    real = path.resolve()
                    if real in seen_files:
                        continue
                    seen_files.add(real)
                yield path

    def scan(self, parallel: bool = True) -> ScanResult:
        """
        Run the pipeline over every discovered file.

        Args:
            parallel: Use a thread pool for larger batches

        Returns:
            ScanResult ordered by file path
        """
        paths = self.discover()
        timeout_seconds = self.config.timeout_seconds

        if not parallel or len(paths) < _PARALLEL_THRESHOLD:
            file_results = [process_file(p, timeout_seconds) for p in paths]
        else:
            workers = self.config.workers or _DEFAULT_WORKERS
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order, i.e. sorted by path
                file_results = list(
                    executor.map(lambda p: process_file(p, timeout_seconds), paths)
                )

        result = ScanResult()
        for file_result in file_results:
            if file_result.error is not None:
                result.errors.append(file_result.error)
                continue
            result.files_scanned += 1
            result.functions.extend(file_result.functions)

        logger.info(
            f"Scan complete: {result.files_scanned} analyzed, "
            f"{len(result.errors)} errors, {len(result.functions)} functions"
        )
        return result
