"""
Configuration for the Kaleidoscope front end.

Both configurations are plain dataclasses passed to the Lexer and Parser
constructors; leaving them out gives the defaults below.
"""

from dataclasses import dataclass, field
from typing import Dict


def default_binop_precedence() -> Dict[str, int]:
    """The standard binary operator table. Higher binds tighter."""
    return {
        "<": 10,
        ">": 10,
        "+": 20,
        "-": 20,
        "*": 30,
        "/": 30,
    }


@dataclass
class LexerConfig:
    """Configuration parameters for the lexer"""

    filename: str = "<input>"

    # Record an L003 warning when a numeric literal like 1.2.3 is truncated
    warn_on_malformed_numbers: bool = True


@dataclass
class ParserConfig:
    """Configuration parameters for the parser"""

    binop_precedence: Dict[str, int] = field(default_factory=default_binop_precedence)

    # Maximum nesting of parenthesized/argument expressions
    max_nesting_depth: int = 100

    # Log every grammar rule entered at DEBUG level
    trace: bool = False

    def __post_init__(self):
        if self.max_nesting_depth < 1:
            raise ValueError("max_nesting_depth must be at least 1")
        for op, prec in self.binop_precedence.items():
            if len(op) != 1:
                raise ValueError(f"binary operator must be a single character: {op!r}")
            if prec <= 0:
                raise ValueError(f"precedence for {op!r} must be positive, got {prec}")
