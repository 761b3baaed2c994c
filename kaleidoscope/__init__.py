"""
Kaleidoscope Front End Package

A tokenizer and recursive-descent, precedence-climbing parser for the
Kaleidoscope toy language, producing an AST of function definitions,
extern declarations and expressions for a separate code generator.

Architecture:
    kaleidoscope/
    ├── lexer/           # Tokenization
    ├── parser/          # Syntax analysis and AST generation
    ├── config.py        # Lexer/parser configuration
    ├── driver.py        # Top-level loop with error recovery
    └── cli.py           # kaleidoscope-parse command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config import LexerConfig, ParserConfig
from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParseError
from .driver import Driver, DriverResult, CodeGenerator, parse_source

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "ParseError",
    "Driver",
    "DriverResult",
    "CodeGenerator",
    "parse_source",

    # Configuration
    "LexerConfig",
    "ParserConfig",

    # Version info
    "__version__",
    "__license__",
]
