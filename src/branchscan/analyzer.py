"""Complexity and naming checks for extracted functions.

The complexity score is a deliberately simplified proxy for cyclomatic
complexity: the number of ``if``, ``switch``, ``for`` and ``while`` words in
a function body. ``else``, ``do``, ``case``, ``catch``, ternaries and logical
operators are not counted, and keywords inside nested lambdas or local
classes count toward the enclosing function.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable

from .tokens import Character, Number, Token, Word

if TYPE_CHECKING:
    from .models import Function

BRANCH_KEYWORDS = frozenset({"if", "switch", "for", "while"})

CAMEL_CASE_RE = re.compile(r"^[a-z][a-z0-9]*([A-Z][a-z0-9]+)*[A-Za-z0-9]?$")


def count_branches(tokens: Iterable[Token]) -> int:
    """Count branching keywords in a token sequence."""
    count = 0
    for token in tokens:
        if isinstance(token, Word):
            if token.text in BRANCH_KEYWORDS:
                count += 1
        elif isinstance(token, (Number, Character)):
            continue
        else:
            raise TypeError(f"Not a token: {token!r}")
    return count


def matches_camel_case(name: str) -> bool:
    """True if ``name`` follows the lowerCamelCase convention.

    Example:
        >>> matches_camel_case("calculateTotal")
        True
        >>> matches_camel_case("XMLParser")
        False
    """
    return CAMEL_CASE_RE.fullmatch(name) is not None


def complexity(function: Function) -> int:
    """Number of branching keywords in the function body."""
    return count_branches(function.body)


def is_camel_case(function: Function) -> bool:
    """True if the function name is lowerCamelCase."""
    return matches_camel_case(function.name.text)
