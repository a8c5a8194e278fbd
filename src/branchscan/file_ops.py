"""
Safe file operations for branchscan.

Provides timeout-protected file reading and path filtering helpers.
"""

import signal
import threading
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from .exceptions import FileAccessError


class ReadTimeoutError(Exception):
    """Raised when a read operation times out."""

    pass


def _timeout_handler(signum, frame):
    raise ReadTimeoutError("Operation timed out")


@contextmanager
def timeout(seconds: int) -> Generator[None, None, None]:
    """
    Context manager for timeout protection.

    SIGALRM can only be installed from the main thread, so worker threads
    (and platforms without SIGALRM) run without a timeout.

    Args:
        seconds: Timeout in seconds

    Raises:
        ReadTimeoutError: If operation exceeds timeout
    """
    if (
        seconds <= 0
        or not hasattr(signal, "SIGALRM")
        or threading.current_thread() is not threading.main_thread()
    ):
        yield
        return

    old_handler = signal.signal(signal.SIGALRM, _timeout_handler)
    signal.alarm(seconds)

    try:
        yield
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, old_handler)


def safe_read_file(
    filepath: Path,
    timeout_seconds: int = 10,
    encoding: str = "utf-8-sig",
    errors: str = "replace",
) -> str:
    """
    Read a source file, converting every failure into FileAccessError.

    Args:
        filepath: File to read
        timeout_seconds: Timeout in seconds (main thread only)
        encoding: Text encoding; the default strips a leading BOM
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read or decoded
    """
    try:
        with timeout(timeout_seconds):
            with open(filepath, encoding=encoding, errors=errors) as f:
                return f.read()
    except ReadTimeoutError:
        raise FileAccessError(filepath, f"Read operation timed out after {timeout_seconds}s")
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except LookupError as e:
        raise FileAccessError(filepath, f"Unknown encoding: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def should_skip_file(filepath: Path, exclude_patterns: list[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        filepath: File to check
        exclude_patterns: List of glob patterns to exclude

    Returns:
        True if file should be skipped
    """
    for pattern in exclude_patterns:
        if filepath.match(pattern):
            return True
    return False


def is_hidden(filepath: Path, root: Path) -> bool:
    """True if any path component below ``root`` starts with a dot."""
    try:
        parts = filepath.relative_to(root).parts
    except ValueError:
        parts = filepath.parts
    return any(part.startswith(".") and part not in (".", "..") for part in parts)
