"""Lexical tokenizer for C-family source text.

Turns raw file text into a flat, source-ordered sequence of Word, Number and
Character tokens. Comments and whitespace produce nothing; line breaks only
advance the line counter.

Lexing is best-effort and never fails on malformed text. The only failure
mode is an unreadable file, which ``tokenize_file`` reports as a value
instead of raising.

Quoted literals (``"..."`` and ``'...'``) collapse into a single Character
token carrying the quote symbol, so brackets and keywords inside strings
never reach the function extractor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import FileAccessError
from .file_ops import safe_read_file
from .logging_config import get_logger
from .tokens import Character, Number, Token, Word

logger = get_logger(__name__)

# Alternatives are tried left to right at each position, so comments win
# over a lone "/" and numbers win over words for a leading digit.
_TOKEN_RE = re.compile(
    r"""
    (?P<newline>\r\n|\r|\n)
    |(?P<space>(?:[^\S\r\n]|[\x00-\x08\x0e-\x1f])+)
    |(?P<line_comment>//[^\r\n]*)
    |(?P<block_comment>/\*.*?(?:\*/|\Z))
    |(?P<quoted>(?P<quote>["'])(?:\\[^\r\n]|(?!(?P=quote))[^\\\r\n])*(?P=quote)?)
    |(?P<number>[0-9]+)
    |(?P<word>[^\W\d]\w*)
    |(?P<char>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class TokenizedFile:
    """Token buffer for one file, or the read error that prevented it.

    Attributes:
        path: Source file path
        tokens: Tokens in source order (empty when the file was unreadable)
        error: FileAccessError if the file could not be read
    """

    path: Path
    tokens: tuple[Token, ...]
    error: Optional[FileAccessError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def tokenize(text: str) -> list[Token]:
    """
    Tokenize C-family source text.

    Args:
        text: Full file contents

    Returns:
        Tokens in source order

    Example:
        >>> [str(t) for t in tokenize("a.b")]
        ["Word: 'a'", "Char: '.'", "Word: 'b'"]
    """
    tokens: list[Token] = []
    line = 1

    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        span = match.span()

        if kind == "newline":
            line += 1
        elif kind == "space" or kind == "line_comment":
            continue
        elif kind == "block_comment":
            line += len(_NEWLINE_RE.findall(match.group()))
        elif kind == "quoted":
            tokens.append(Character(match.group("quote"), line, span))
        elif kind == "number":
            tokens.append(Number(float(match.group()), line, span))
        elif kind == "word":
            tokens.append(Word(match.group(), line, span))
        else:
            tokens.append(Character(match.group(), line, span))

    return tokens


def tokenize_file(path: Path, timeout_seconds: int = 10) -> TokenizedFile:
    """
    Read and tokenize one source file.

    An unreadable file yields an empty token buffer with the error attached;
    the caller decides whether to skip, warn or abort.

    Args:
        path: File to read
        timeout_seconds: Read timeout (applied on the main thread only)

    Returns:
        TokenizedFile with tokens, or with ``error`` set
    """
    path = Path(path)
    try:
        text = safe_read_file(path, timeout_seconds=timeout_seconds)
    except FileAccessError as e:
        logger.warning(f"Could not tokenize file '{path}': {e.reason}")
        return TokenizedFile(path=path, tokens=(), error=e)

    tokens = tokenize(text)
    logger.debug(f"Tokenized {path}: {len(tokens)} tokens")
    return TokenizedFile(path=path, tokens=tuple(tokens))
