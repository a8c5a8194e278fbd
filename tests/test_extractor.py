"""Tests for heuristic function extraction."""

from pathlib import Path

import pytest

from branchscan.api import extract_functions
from branchscan.extractor import extract, match_bracket, rejection_reason
from branchscan.tokenizer import tokenize
from branchscan.tokens import render


def names(source: str) -> list:
    return [fn.name.text for fn in extract_functions(source)]


class TestBalancedExtraction:
    """Parameter lists and bodies are delimited by bracket matching."""

    def test_simple_function(self):
        """One function with exact parameter and body slices."""
        (fn,) = extract_functions("int add(int a, int b) { return a + b; }")
        assert fn.name.text == "add"
        assert render(fn.parameters) == "int a , int b"
        assert render(fn.body) == "return a + b ;"

    def test_nested_brackets_in_body(self):
        """Inner braces and parens do not end the body early."""
        (fn,) = extract_functions("void f() { if ((a)) { g(); } else { h(); } } int x;")
        assert render(fn.body) == "if ( ( a ) ) { g ( ) ; } else { h ( ) ; }"

    def test_ranges_do_not_overlap(self):
        """Body starts after the parameter list's closing paren."""
        (fn,) = extract_functions("void f(int a) { a++; }")
        assert fn.parameter_range[1] < fn.body_range[0]
        assert fn.buffer[fn.parameter_range[1]].symbol == ")"
        assert fn.buffer[fn.body_range[0] - 1].symbol == "{"

    def test_empty_parameters_and_body(self):
        (fn,) = extract_functions("void noop() {}")
        assert fn.parameters == ()
        assert fn.body == ()

    def test_generic_return_type(self):
        """'>' before the name counts as a return type."""
        assert names("List<String> names() { return list; }") == ["names"]

    def test_array_return_type_not_recognised(self):
        """']' is not accepted as a type token."""
        assert names("int[] values() { return v; }") == []

    def test_brackets_in_string_literals_ignored(self):
        """Quoted braces do not unbalance the body."""
        (fn,) = extract_functions('void f() { String s = "}"; if (x) {} }')
        assert fn.complexity() == 1


class TestCandidateRules:
    """Local-context rejection rules."""

    def test_constructor_with_modifier_skipped(self):
        """public Foo(...) is treated as a constructor."""
        assert names("class Foo { public Foo(int x) { this.x = x; } }") == []

    def test_type_before_name_is_a_function(self):
        """Bar Foo(...) is a method returning Bar."""
        assert names("class Foo { Bar Foo(int x) { this.x = x; } }") == ["Foo"]

    def test_unmodified_constructor_after_annotation_reported(self):
        """Constructors without a modifier are not filtered."""
        assert names("class A { @Inject A(B b) { } }") == ["A"]

    def test_control_keywords_skipped(self):
        """if/while/for/switch/catch are not function names."""
        source = """
        void f() {
            if (a) { }
            while (b) { }
            for (;;) { }
            switch (c) { }
            try { } catch (E e) { }
        }
        """
        assert names(source) == ["f"]

    def test_anonymous_class_skipped_but_methods_found(self):
        """new Foo() { ... } is not a function; its methods are."""
        source = "Runnable r = new Runnable() { public void run() { go(); } };"
        assert names(source) == ["run"]

    def test_nested_functions_reported(self):
        """Methods inside a body are reported after the enclosing one."""
        source = "void outer() { Runnable r = new Runnable() { public void run() { } }; }"
        assert names(source) == ["outer", "run"]

    def test_calls_are_not_functions(self):
        """Calls followed by ';' or preceded by an operator are skipped."""
        assert names("void f() { int x = compute(y); return g(x); }") == ["f"]

    def test_declaration_without_body_skipped(self):
        """Abstract and interface methods have no body."""
        assert names("abstract void f(int x); interface I { int g(); }") == []

    def test_throws_clause_not_supported(self):
        """Anything between ')' and '{' rejects the candidate."""
        assert names("void f() throws IOException { }") == []

    @pytest.mark.parametrize(
        "source,index,reason",
        [
            ("void if() {}", 1, "reserved word"),
            ("public Foo() {}", 1, "constructor"),
            ("new Foo() {}", 1, "anonymous class"),
            ("= foo() {}", 1, "no return type"),
            ("int x;", 1, "no parameter list"),
            ("int f() {}", 1, None),
        ],
    )
    def test_rejection_reason(self, source, index, reason):
        assert rejection_reason(tokenize(source), index) == reason


class TestMalformedInput:
    """Unresolvable candidates are skipped, never raised."""

    def test_truncated_parameter_list(self):
        """Stream ends before ')'."""
        assert names("void f(int a, ") == []

    def test_truncated_body(self):
        """Stream ends before the closing '}'."""
        assert names("void f(int a) { if (a) {") == []

    def test_stream_ends_after_parameters(self):
        assert names("void f()") == []

    def test_scan_continues_after_malformed_candidate(self):
        """A broken declaration does not hide later functions."""
        assert names("void broken( { } void ok() { }") == ["ok"]

    def test_empty_and_tiny_streams(self):
        assert extract([], "X.java") == []
        assert names("f") == []
        assert names("f()") == []


class TestMetadata:
    """Recorded location data."""

    def test_source_file_and_line(self):
        source = "class A {\n\n  int first() { return 1; }\n  int second() { return 2; }\n}"
        first, second = extract(tokenize(source), "src/A.java")
        assert first.source_file == Path("src/A.java")
        assert (first.line, second.line) == (3, 4)
        assert second.display_name == "second(A.java:4)"

    def test_sample_file(self, sample_java):
        """Constructor skipped, generic and non-camelCase methods found."""
        fns = extract_functions(sample_java, "Sample.java")
        assert [(fn.name.text, fn.line) for fn in fns] == [
            ("clamp", 16),
            ("Names_List", 26),
            ("run_all", 30),
        ]

    def test_deterministic(self, sample_java):
        """Same tokens, same functions in the same order."""
        tokens = tokenize(sample_java)
        assert extract(tokens, "S.java") == extract(tokens, "S.java")


class TestMatchBracket:
    def test_matches_nested(self):
        tokens = tokenize("( a ( b ) c ) d")
        assert match_bracket(tokens, 0, "(", ")") == 6

    def test_unbalanced_returns_none(self):
        tokens = tokenize("{ { }")
        assert match_bracket(tokens, 0, "{", "}") is None
