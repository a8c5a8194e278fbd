"""Heuristic function extraction from a token stream.

No grammar and no AST: every Word token is a candidate function name and is
accepted or rejected by looking at its immediate neighbours, then the
parameter list and body are delimited by balanced-bracket scans.

    <type-or-modifier | '>'>  NAME  '(' ... ')'  '{' ... '}'

Known, intentional gaps of the heuristic:
    - constructors without an access modifier are reported as functions
    - methods of anonymous or local classes are reported as separate
      functions and their keywords also count toward the enclosing body
    - abstract / interface declarations (no body) are never reported
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .logging_config import get_logger
from .models import Function
from .tokens import Character, Number, Token, Word, is_char, is_word

logger = get_logger(__name__)

RESERVED_WORDS = frozenset({"if", "else", "for", "while", "do", "switch", "try", "catch"})
ACCESS_MODIFIERS = frozenset({"public", "private", "protected"})

Predicate = Callable[[Sequence[Token], int], bool]


def _is_reserved_word(tokens: Sequence[Token], i: int) -> bool:
    return is_word(tokens[i], *RESERVED_WORDS)


def _follows_access_modifier(tokens: Sequence[Token], i: int) -> bool:
    # "public Foo(" is taken to be a constructor
    return is_word(tokens[i - 1], *ACCESS_MODIFIERS)


def _follows_new(tokens: Sequence[Token], i: int) -> bool:
    # "new Foo() { ... }" is an anonymous class, not a declaration
    return is_word(tokens[i - 1], "new")


def _lacks_return_type(tokens: Sequence[Token], i: int) -> bool:
    previous = tokens[i - 1]
    if isinstance(previous, Word):
        return False
    if isinstance(previous, Character):
        return previous.symbol != ">"
    if isinstance(previous, Number):
        return True
    raise TypeError(f"Not a token: {previous!r}")


def _lacks_parameter_list(tokens: Sequence[Token], i: int) -> bool:
    return not is_char(tokens[i + 1], "(")


# Checked in order; the first one that fires rejects the candidate.
CANDIDATE_REJECTIONS: tuple[tuple[str, Predicate], ...] = (
    ("reserved word", _is_reserved_word),
    ("constructor", _follows_access_modifier),
    ("anonymous class", _follows_new),
    ("no return type", _lacks_return_type),
    ("no parameter list", _lacks_parameter_list),
)


def match_bracket(
    tokens: Sequence[Token], open_index: int, opener: str, closer: str
) -> Optional[int]:
    """
    Find the index of the bracket closing ``tokens[open_index]``.

    Only Character tokens count toward the depth.

    Args:
        tokens: Token sequence
        open_index: Index of the opening bracket
        opener: Opening symbol, e.g. "("
        closer: Closing symbol, e.g. ")"

    Returns:
        Index of the matching closer, or None if the stream ends first
    """
    depth = 1
    for index in range(open_index + 1, len(tokens)):
        token = tokens[index]
        if not isinstance(token, Character):
            continue
        if token.symbol == opener:
            depth += 1
        elif token.symbol == closer:
            depth -= 1
            if depth == 0:
                return index
    return None


def rejection_reason(tokens: Sequence[Token], i: int) -> Optional[str]:
    """Name of the first local-context rule rejecting ``tokens[i]``, if any."""
    for reason, rejects in CANDIDATE_REJECTIONS:
        if rejects(tokens, i):
            return reason
    return None


def extract(tokens: Sequence[Token], source_file: Union[str, Path]) -> list[Function]:
    """
    Extract functions from a file's token sequence.

    Unresolvable candidates (unbalanced or truncated brackets) are skipped;
    the rest of the file is still scanned.

    Args:
        tokens: Tokens of one file, in source order
        source_file: Path recorded on every Function

    Returns:
        Functions in order of their name token
    """
    buffer = tuple(tokens)
    source_file = Path(source_file)
    functions: list[Function] = []

    for i in range(1, len(buffer) - 1):
        name = buffer[i]
        if not isinstance(name, Word):
            continue
        if rejection_reason(buffer, i) is not None:
            continue

        params_close = match_bracket(buffer, i + 1, "(", ")")
        if params_close is None:
            logger.debug(
                f"{source_file}:{name.line}: unbalanced parameter list for '{name.text}'"
            )
            continue

        body_open = params_close + 1
        if body_open >= len(buffer) or not is_char(buffer[body_open], "{"):
            continue

        body_close = match_bracket(buffer, body_open, "{", "}")
        if body_close is None:
            logger.debug(f"{source_file}:{name.line}: unbalanced body for '{name.text}'")
            continue

        functions.append(
            Function(
                name=name,
                buffer=buffer,
                parameter_range=(i + 2, params_close),
                body_range=(body_open + 1, body_close),
                source_file=source_file,
            )
        )

    return functions
