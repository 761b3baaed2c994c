"""
Tests for AST rendering.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.parser import (
    Parser, dump, to_sexpr, NumberExpr, VariableExpr, CallExpr, Prototype
)


class TestDump(unittest.TestCase):

    def test_dump_definition(self):
        fn = Parser("def foo(x y) x + 1").parse_definition()
        expected = "\n".join([
            "FunctionDef[foo]",
            "  Prototype[foo](x, y)",
            "  BinaryExpr[+]",
            "    VariableExpr[x]",
            "    NumberExpr[1.0]",
        ])
        self.assertEqual(dump(fn), expected)

    def test_dump_call(self):
        expr = CallExpr("f", (NumberExpr(2.5), VariableExpr("a")))
        self.assertEqual(dump(expr, indent=2),
                         "  CallExpr[f]\n    NumberExpr[2.5]\n    VariableExpr[a]")

    def test_dump_zero_argument_call(self):
        self.assertEqual(dump(CallExpr("f")), "CallExpr[f]")

    def test_dump_anonymous_function(self):
        fn = Parser("2").parse_top_level_expression()
        self.assertEqual(dump(fn), "FunctionDef[]\n  Prototype[]()\n  NumberExpr[2.0]")

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            dump(42)
        with self.assertRaises(TypeError):
            to_sexpr(object())

    def test_to_sexpr_prototype(self):
        self.assertEqual(to_sexpr(Prototype("sin", ("x",))), ["Proto", "sin", ["x"]])


if __name__ == '__main__':
    unittest.main()
