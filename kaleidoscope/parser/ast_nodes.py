"""
Abstract Syntax Tree node definitions for Kaleidoscope.

The node set is closed: four expression variants, a function prototype and a
function definition. Nodes are frozen dataclasses, so a tree cannot change
once the parser hands it over, and every composite node owns its children
outright (no sharing, no parent pointers).

Each node carries an optional source location. Locations are excluded from
equality, so two trees compare equal when they have the same shape and
values regardless of where they came from.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

from ..lexer.tokens import SourceLocation


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class NumberExpr:
    """Numeric literal like 1.0."""
    value: float
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class VariableExpr:
    """Reference to a variable, like x."""
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BinaryExpr:
    """Binary operator application."""
    op: str
    lhs: "Expr"
    rhs: "Expr"
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class CallExpr:
    """Function call, arguments in source order."""
    callee: str
    args: Tuple["Expr", ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)


Expr = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr]


# ============================================================================
# Functions
# ============================================================================

@dataclass(frozen=True)
class Prototype:
    """
    The "prototype" for a function: its name and its parameter names
    (thus implicitly the number of arguments the function takes).
    """
    name: str
    params: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def is_anonymous(self) -> bool:
        """True for the nameless prototype wrapped around a top-level expression."""
        return self.name == ""


@dataclass(frozen=True)
class FunctionDef:
    """A function definition: prototype plus body expression."""
    prototype: Prototype
    body: Expr
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.prototype.name


Node = Union[NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, FunctionDef]


def children(node: Node) -> Tuple[Node, ...]:
    """Get the direct child nodes of `node`, in source order."""
    if isinstance(node, (NumberExpr, VariableExpr, Prototype)):
        return ()
    if isinstance(node, BinaryExpr):
        return (node.lhs, node.rhs)
    if isinstance(node, CallExpr):
        return tuple(node.args)
    if isinstance(node, FunctionDef):
        return (node.prototype, node.body)
    raise TypeError(f"unknown AST node type: {type(node).__name__}")


def walk(node: Node) -> Iterator[Node]:
    """Yield `node` and all of its descendants, depth first, pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children(current)))
