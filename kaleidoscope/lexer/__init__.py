"""
Kaleidoscope Lexer Package

A one-character-lookahead tokenizer for the Kaleidoscope language.

Key Features:
- Lazy tokenization from strings or text streams
- def/extern keywords, identifiers, float literals, raw single characters
- '#' line comments
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "LexerWarning",
    "tokenize_string",
    "tokenize_file",
]
