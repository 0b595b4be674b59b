"""
Object Module Tokenizer
=======================

This module splits linker input text into a lazy stream of tokens.

The input format has almost no syntax: the only characters that matter
are runs of ASCII letters, digits and underscores. Everything else
(spaces, newlines, punctuation) is a separator, so the layout of the
input across lines is irrelevant.

Tokens carry no type. Whether "1004" is a count, a location or an
instruction word is decided by the module assembler, which knows where
in the module layout it currently is.

Example
-------
>>> from twopass.linker.lexer import Tokenizer
>>> for token in Tokenizer("1 xy 2\\n2 z xy").tokenize():
...     print(token)
Token('1', 1:1)
Token('xy', 1:3)
Token('2', 1:6)
Token('2', 2:1)
Token('z', 2:3)
Token('xy', 2:5)
"""

from dataclasses import dataclass
from typing import Iterator
import re

from twopass.errors import SourceLocation


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from the input text.

    Attributes:
        value: The token text
        line: Line number in the input (1-indexed)
        column: Column number in the input (1-indexed)
        filename: Name of the input file
    """
    value: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.value!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Tokenizer
# =============================================================================

class Tokenizer:
    """
    Splits input text into word-or-digit tokens.

    Usage:
        tokens = list(Tokenizer(text, "input-1.txt").tokenize())

    The tokenizer is lazy: tokenize() yields tokens as the text is
    scanned, so a fatal error in the module assembler stops scanning at
    the offending token.
    """

    # Word characters in the ASCII sense: letters, digits, underscore
    TOKEN_PATTERN = re.compile(r"\w+", re.ASCII)

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def tokenize(self) -> Iterator[Token]:
        """Yield each token in the source with its position."""
        line = 1
        line_start = 0
        scanned = 0

        for match in self.TOKEN_PATTERN.finditer(self.source):
            start = match.start()

            # Advance the line counter over the separators since the last token
            newlines = self.source.count("\n", scanned, start)
            if newlines:
                line += newlines
                line_start = self.source.rfind("\n", scanned, start) + 1
            scanned = match.end()

            yield Token(
                value=match.group(),
                line=line,
                column=start - line_start + 1,
                filename=self.filename,
            )


def tokenize(source: str, filename: str = "<input>") -> Iterator[Token]:
    """Convenience wrapper around Tokenizer(source, filename).tokenize()."""
    return Tokenizer(source, filename).tokenize()
