"""Data models for branchscan"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

from .analyzer import complexity, is_camel_case
from .tokens import Token, Word, render

# Half-open (start, end) index range into a file's token buffer
TokenRange = Tuple[int, int]


@dataclass(frozen=True)
class Function:
    """A function discovered in a file's token buffer.

    ``parameters`` and ``body`` are views into the shared buffer, described
    by index ranges that exclude the surrounding ``()`` and ``{}``.

    Attributes:
        name: Word token holding the function name
        buffer: The file's full token sequence
        parameter_range: Range of the tokens between the parentheses
        body_range: Range of the tokens between the braces
        source_file: File the function was found in
    """

    name: Word
    buffer: Sequence[Token]
    parameter_range: TokenRange
    body_range: TokenRange
    source_file: Path

    def __post_init__(self) -> None:
        p_start, p_end = self.parameter_range
        b_start, b_end = self.body_range
        if not 0 <= p_start <= p_end < b_start <= b_end <= len(self.buffer):
            raise ValueError(
                f"Invalid token ranges for {self.name.text}: "
                f"parameters={self.parameter_range}, body={self.body_range}"
            )

    @property
    def parameters(self) -> Sequence[Token]:
        start, end = self.parameter_range
        return self.buffer[start:end]

    @property
    def body(self) -> Sequence[Token]:
        start, end = self.body_range
        return self.buffer[start:end]

    @property
    def line(self) -> int:
        """Declaration line (line of the name token)."""
        return self.name.line

    @property
    def display_name(self) -> str:
        """``name(File.java:12)``"""
        return f"{self.name.text}({Path(self.source_file).name}:{self.line})"

    def complexity(self) -> int:
        return complexity(self)

    def is_camel_case(self) -> bool:
        return is_camel_case(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.text,
            "file": str(self.source_file),
            "line": self.line,
            "parameters": render(self.parameters),
            "body_tokens": len(self.body),
            "complexity": self.complexity(),
            "camel_case": self.is_camel_case(),
        }

    def __str__(self) -> str:
        return self.display_name
