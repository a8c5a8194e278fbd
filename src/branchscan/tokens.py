"""Token model for the C-family tokenizer.

A token is one of three immutable variants, each tagged with the 1-based
line it was produced on:

    Word       identifier-like run (``foo``, ``_bar1``)
    Number     numeric literal, value stored as float
    Character  any other significant character, one token per character

Consumers match on the three classes explicitly; ``Token`` is the closed
union of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Tuple, Union

# (start, end) character offsets into the tokenized text
Span = Tuple[int, int]


@dataclass(frozen=True)
class Word:
    """A run of letters, digits and underscores not starting with a digit."""

    text: str
    line: int
    span: Span = field(default=(0, 0), compare=False, repr=False)

    def __str__(self) -> str:
        return f"Word: '{self.text}'"


@dataclass(frozen=True)
class Number:
    """A numeric literal."""

    value: float
    line: int
    span: Span = field(default=(0, 0), compare=False, repr=False)

    def __str__(self) -> str:
        return f"Number: '{self.value}'"


@dataclass(frozen=True)
class Character:
    """A single significant character (punctuation, operator, bracket, quote)."""

    symbol: str
    line: int
    span: Span = field(default=(0, 0), compare=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.symbol) != 1:
            raise ValueError(f"Character token needs exactly one symbol, got {self.symbol!r}")

    def __str__(self) -> str:
        return f"Char: '{self.symbol}'"


Token = Union[Word, Number, Character]


def is_word(token: Token, *texts: str) -> bool:
    """True if token is a Word, optionally restricted to the given texts."""
    if not isinstance(token, Word):
        return False
    return not texts or token.text in texts


def is_char(token: Token, symbol: str) -> bool:
    """True if token is the Character ``symbol``."""
    return isinstance(token, Character) and token.symbol == symbol


def describe(token: Token) -> str:
    """Short source-like rendering of a token (``foo``, ``42``, ``{``)."""
    if isinstance(token, Word):
        return token.text
    if isinstance(token, Number):
        value = token.value
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(token, Character):
        return token.symbol
    raise TypeError(f"Not a token: {token!r}")


def render(tokens: Sequence[Token]) -> str:
    """Space-separated rendering of a token sequence.

    Example:
        >>> render([Word("return", 1), Word("a", 1), Character(";", 1)])
        'return a ;'
    """
    return " ".join(describe(t) for t in tokens)


def lexeme(source: str, token: Token) -> str:
    """Literal source text a token was produced from."""
    start, end = token.span
    return source[start:end]
