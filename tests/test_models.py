"""Tests for the Function record."""

from pathlib import Path

import pytest

from branchscan.api import extract_functions
from branchscan.models import Function
from branchscan.tokenizer import tokenize
from branchscan.tokens import Word


class TestFunction:
    def test_views_share_the_buffer(self):
        """Parameters and body are slices of one token buffer."""
        first, second = extract_functions("int a(int x) { } int b(int y) { y++; }")
        assert first.buffer is second.buffer
        assert first.body == first.buffer[first.body_range[0]:first.body_range[1]]

    def test_to_dict(self):
        (fn,) = extract_functions("int maxOf(int a, int b) { if (a > b) { return a; } return b; }", "M.java")
        assert fn.to_dict() == {
            "name": "maxOf",
            "file": "M.java",
            "line": 1,
            "parameters": "int a , int b",
            "body_tokens": 14,
            "complexity": 1,
            "camel_case": True,
        }

    def test_str_is_display_name(self):
        (fn,) = extract_functions("void go() {}", Path("src/pkg/Go.java"))
        assert str(fn) == "go(Go.java:1)"

    def test_overlapping_ranges_rejected(self):
        buffer = tuple(tokenize("void f() { }"))
        with pytest.raises(ValueError):
            Function(
                name=Word("f", 1),
                buffer=buffer,
                parameter_range=(3, 5),
                body_range=(4, 5),
                source_file=Path("F.java"),
            )

    def test_range_past_buffer_rejected(self):
        buffer = tuple(tokenize("void f() { }"))
        with pytest.raises(ValueError):
            Function(
                name=Word("f", 1),
                buffer=buffer,
                parameter_range=(3, 3),
                body_range=(5, 9),
                source_file=Path("F.java"),
            )
