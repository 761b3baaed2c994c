"""
Kaleidoscope Parser Package

Implements a recursive descent parser with operator-precedence climbing for
the Kaleidoscope language, producing immutable AST nodes.

Key Features:
- One token of lookahead pulled lazily from the lexer
- Configurable binary operator precedence table
- Structured, non-fatal parse errors with source locations
- Recursion depth guard for deeply nested expressions
"""

from .ast_nodes import (
    Expr, Node, NumberExpr, VariableExpr, BinaryExpr, CallExpr,
    Prototype, FunctionDef, children, walk
)
from .parser import Parser, parse_expression_string
from .errors import (
    ParseError, UnexpectedTokenError, IncompleteArgumentListError,
    IncompletePrototypeError, NestingTooDeepError
)
from .ast_printer import dump, to_sexpr

__all__ = [
    # Core parser
    "Parser",
    "parse_expression_string",

    # AST nodes
    "Expr", "Node",
    "NumberExpr", "VariableExpr", "BinaryExpr", "CallExpr",
    "Prototype", "FunctionDef",
    "children", "walk",

    # Rendering
    "dump", "to_sexpr",

    # Error handling
    "ParseError", "UnexpectedTokenError", "IncompleteArgumentListError",
    "IncompletePrototypeError", "NestingTooDeepError",
]
