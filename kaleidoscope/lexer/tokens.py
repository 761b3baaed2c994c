"""
Token definitions for the Kaleidoscope lexer.

Kaleidoscope has a deliberately tiny lexical grammar:
- Keywords (def, extern)
- Identifiers ([A-Za-z][A-Za-z0-9]*)
- Numeric literals (always 64-bit floats)
- Single raw characters (operators, punctuation, anything unrecognized)
- End of input
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in Kaleidoscope."""

    EOF = auto()                    # End of input

    # Commands
    DEF = auto()                    # def
    EXTERN = auto()                 # extern

    # Primary
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 1, 1.5, .25

    # Any other single character: ( ) , ; + - * / < > and the rest
    CHAR = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and for the CLI token dump.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Kaleidoscope language.

    `value` is the identifier text for IDENTIFIER, a float for NUMBER,
    the raw character for CHAR and None for keywords and EOF.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Parsed/semantic value
    location: SourceLocation

    def __str__(self) -> str:
        if self.type == TokenType.NUMBER:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def is_char(self, char: str) -> bool:
        """Check if this is the single-character token `char`."""
        return self.type == TokenType.CHAR and self.value == char

    @property
    def is_keyword(self) -> bool:
        return self.type in (TokenType.DEF, TokenType.EXTERN)

    def describe(self) -> str:
        """Human readable description used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.CHAR:
            return f"'{self.value}'"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.type == TokenType.NUMBER:
            return f"number {self.lexeme}"
        return f"keyword '{self.lexeme}'"


# Reserved words, compared case-sensitively against complete identifiers
KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}

# Character classes. Classification is ASCII only; anything else falls
# through to a CHAR token.
WHITESPACE_CHARS = frozenset(" \t\n\v\f\r")
DIGIT_CHARS = frozenset("0123456789")
ALPHA_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
ALNUM_CHARS = ALPHA_CHARS | DIGIT_CHARS
NUMBER_CHARS = DIGIT_CHARS | {"."}
COMMENT_START = "#"
COMMENT_END_CHARS = frozenset("\n\r")
