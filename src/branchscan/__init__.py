"""
branchscan - heuristic complexity and naming scanner for C-family code

Tokenizes source files, finds function declarations by local token context
and balanced-bracket scanning, scores each function by the number of
branching keywords in its body and flags names that are not camelCase.
"""

__version__ = "0.1.0"

from .api import analyze, extract_functions
from .extractor import extract
from .models import Function
from .summary import AnalysisSummary, summarize
from .tokenizer import TokenizedFile, tokenize, tokenize_file
from .tokens import Character, Number, Token, Word

__all__ = [
    "analyze",
    "extract_functions",
    "tokenize",
    "tokenize_file",
    "TokenizedFile",
    "extract",
    "summarize",
    "AnalysisSummary",
    "Function",
    "Token",
    "Word",
    "Number",
    "Character",
]
