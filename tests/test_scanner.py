"""Tests for file discovery and the scan pipeline."""

from pathlib import Path

import pytest

from branchscan import tokenizer
from branchscan.config import AnalysisConfig
from branchscan.exceptions import FileAccessError, InvalidPathError
from branchscan.scanner import Scanner, process_file


def display_names(result):
    return [fn.display_name for fn in result.functions]


class TestDiscovery:
    """Which files are picked up."""

    def test_filters_extension_hidden_and_excluded(self, java_tree):
        files = Scanner(java_tree).discover()
        assert [f.relative_to(java_tree).as_posix() for f in files] == [
            "Sample.java",
            "pkg/Util.java",
        ]

    def test_hidden_files_allowed(self, java_tree):
        config = AnalysisConfig(allow_hidden_files=True)
        rel = [f.relative_to(java_tree).as_posix() for f in Scanner(java_tree, config).discover()]
        assert ".hidden/Secret.java" in rel

    def test_custom_extensions(self, java_tree):
        config = AnalysisConfig(extensions=[".txt"])
        files = Scanner(java_tree, config).discover()
        assert [f.name for f in files] == ["notes.txt"]

    def test_size_limit(self, java_tree):
        """Files over the size limit are skipped."""
        config = AnalysisConfig(max_file_size_mb=100 / (1024 * 1024))
        names = [f.name for f in Scanner(java_tree, config).discover()]
        assert names == ["Util.java"]

    def test_max_files(self, java_tree):
        config = AnalysisConfig(max_files=1)
        assert len(Scanner(java_tree, config).discover()) == 1

    def test_single_file_root(self, java_tree):
        path = java_tree / "pkg" / "Util.java"
        assert Scanner(path).discover() == [path]

    def test_symlink_loop_visited_once(self, tmp_path):
        """A link back to an ancestor does not repeat files."""
        sub = tmp_path / "d"
        sub.mkdir()
        (sub / "A.java").write_text("class A { void f() {} }", encoding="utf-8")
        try:
            (sub / "loop").symlink_to(tmp_path, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        config = AnalysisConfig(follow_symlinks=True)
        files = Scanner(tmp_path, config).discover()
        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["d/A.java"]
        assert len(Scanner(tmp_path, config).scan().functions) == 1

    def test_symlinked_directory_skipped_by_default(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        (real / "A.java").write_text("class A { void f() {} }", encoding="utf-8")
        try:
            (tmp_path / "alias").symlink_to(real, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        files = Scanner(tmp_path).discover()
        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["real/A.java"]

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            Scanner(tmp_path / "nope")


class TestScan:
    """End-to-end per-file pipeline."""

    def test_functions_ordered_by_path(self, java_tree):
        result = Scanner(java_tree).scan()
        assert result.files_scanned == 2
        assert result.errors == []
        assert display_names(result) == [
            "clamp(Sample.java:16)",
            "Names_List(Sample.java:26)",
            "run_all(Sample.java:30)",
            "twice(Util.java:2)",
        ]

    def test_parallel_matches_sequential(self, tmp_path):
        """Thread pool fan-out gives the same ordered result."""
        for i in range(15):
            (tmp_path / f"F{i:02d}.java").write_text(
                f"class F{i} {{ int m{i}() {{ if (x) {{}} return {i}; }} }}", encoding="utf-8"
            )
        scanner = Scanner(tmp_path, AnalysisConfig(workers=4))
        parallel = scanner.scan(parallel=True)
        sequential = scanner.scan(parallel=False)
        assert display_names(parallel) == display_names(sequential)
        assert display_names(parallel)[:2] == ["m0(F00.java:1)", "m1(F01.java:1)"]
        assert parallel.files_scanned == 15

    def test_unreadable_file_recorded(self, java_tree, monkeypatch):
        """A read failure excludes the file but not the run."""
        real_read = tokenizer.safe_read_file

        def flaky_read(path, timeout_seconds=10):
            if Path(path).name == "Util.java":
                raise FileAccessError(Path(path), "OS error: permission denied")
            return real_read(path, timeout_seconds=timeout_seconds)

        monkeypatch.setattr(tokenizer, "safe_read_file", flaky_read)
        result = Scanner(java_tree).scan()
        assert result.files_scanned == 1
        assert [e.filepath.name for e in result.errors] == ["Util.java"]
        assert "twice(Util.java:2)" not in display_names(result)

    def test_process_file_missing(self, tmp_path):
        result = process_file(tmp_path / "Gone.java")
        assert result.functions == []
        assert isinstance(result.error, FileAccessError)

    def test_scan_is_deterministic(self, java_tree):
        scanner = Scanner(java_tree)
        assert display_names(scanner.scan()) == display_names(scanner.scan())
