"""Shared test fixtures for branchscan tests."""

import os
from pathlib import Path

import pytest


SAMPLE_JAVA = """\
package demo;

import java.util.List;

/**
 * Sample class used across tests.
 */
public class Sample {
    private int total;

    public Sample(int total) {
        this.total = total;
    }

    // Two branches
    public int clamp(int value) {
        if (value < 0) {
            return 0;
        }
        while (value > total) {
            value -= total;
        }
        return value;
    }

    List<String> Names_List() {
        return List.of("{", "}");
    }

    private void run_all() {
        for (int i = 0; i < total; i++) {
            switch (i) {
                case 0: break;
                default: if (i > 2) { continue; }
            }
        }
    }
}
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user/project config files and BRANCHSCAN_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("BRANCHSCAN_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def sample_java():
    """Java source with constructor, generic return type and non-camelCase names."""
    return SAMPLE_JAVA


@pytest.fixture
def java_tree(tmp_path):
    """Small source tree with nested, hidden, excluded and non-Java files."""

    def write(rel: str, content: str) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    write("Sample.java", SAMPLE_JAVA)
    write("pkg/Util.java", "class Util {\n  static int twice(int x) { if (x > 0) { return x * 2; } return 0; }\n}\n")
    write("pkg/notes.txt", "void ignored() { if (a) {} }\n")
    write(".hidden/Secret.java", "class Secret { void hiddenFn() { } }\n")
    write("build/Generated.java", "class Generated { void generatedFn() { } }\n")
    return tmp_path
