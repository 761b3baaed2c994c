"""
Text renderings of Kaleidoscope ASTs.

dump() produces the indented one-node-per-line form printed by the CLI;
to_sexpr() flattens a tree into nested lists, which is handy for comparing
shapes in tests and tooling.
"""

from typing import Any, List

from .ast_nodes import (
    Node, NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, FunctionDef
)


def _format_number(value: float) -> str:
    return repr(float(value))


def dump(node: Node, indent: int = 0) -> str:
    """Render `node` as an indented tree, two spaces per level."""
    pad = " " * indent

    if isinstance(node, NumberExpr):
        return f"{pad}NumberExpr[{_format_number(node.value)}]"
    if isinstance(node, VariableExpr):
        return f"{pad}VariableExpr[{node.name}]"
    if isinstance(node, BinaryExpr):
        lines = [
            f"{pad}BinaryExpr[{node.op}]",
            dump(node.lhs, indent + 2),
            dump(node.rhs, indent + 2),
        ]
        return "\n".join(lines)
    if isinstance(node, CallExpr):
        lines = [f"{pad}CallExpr[{node.callee}]"]
        lines.extend(dump(arg, indent + 2) for arg in node.args)
        return "\n".join(lines)
    if isinstance(node, Prototype):
        return f"{pad}Prototype[{node.name}]({', '.join(node.params)})"
    if isinstance(node, FunctionDef):
        lines = [
            f"{pad}FunctionDef[{node.prototype.name}]",
            dump(node.prototype, indent + 2),
            dump(node.body, indent + 2),
        ]
        return "\n".join(lines)

    raise TypeError(f"unknown AST node type: {type(node).__name__}")


def to_sexpr(node: Node) -> List[Any]:
    """Flatten `node` into a sexpr-like nested list."""
    if isinstance(node, NumberExpr):
        return ["Number", node.value]
    if isinstance(node, VariableExpr):
        return ["Variable", node.name]
    if isinstance(node, BinaryExpr):
        return ["Binop", node.op, to_sexpr(node.lhs), to_sexpr(node.rhs)]
    if isinstance(node, CallExpr):
        return ["Call", node.callee, [to_sexpr(arg) for arg in node.args]]
    if isinstance(node, Prototype):
        return ["Proto", node.name, list(node.params)]
    if isinstance(node, FunctionDef):
        return ["Function", to_sexpr(node.prototype), to_sexpr(node.body)]

    raise TypeError(f"unknown AST node type: {type(node).__name__}")
