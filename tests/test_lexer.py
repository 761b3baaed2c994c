"""
Test suite for the Kaleidoscope lexer.

Tests cover:
- Keyword, identifier, number and raw character tokens
- Whitespace and comment skipping
- End-of-input behaviour and read faults
- Permissive numeric literals
- Source locations
"""

import io
import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.lexer import Lexer, Token, TokenType, tokenize_string, tokenize_file
from kaleidoscope.config import LexerConfig


class FaultyStream:
    """Text stream that fails after returning its data."""

    def __init__(self, data: str):
        self._data = io.StringIO(data)

    def read(self, n: int = -1) -> str:
        char = self._data.read(n)
        if not char:
            raise OSError("device went away")
        return char


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        return [t.type for t in Lexer(source).tokenize()]

    def _values(self, source: str):
        return [t.value for t in Lexer(source).tokenize()]

    def test_empty_input(self):
        """Empty input yields a single EOF token."""
        tokens = Lexer("").tokenize()
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)

    def test_whitespace_and_comments_only(self):
        """Whitespace/comment-only input yields exactly one EOF."""
        for source in ["   \t\n  ", "# just a comment", "# one\n# two\r\n   # three\n", "\v\f\r\n"]:
            with self.subTest(source=source):
                self.assertEqual(self._types(source), [TokenType.EOF])

    def test_eof_is_repeated(self):
        """Calls after the end of input keep returning EOF."""
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        for _ in range(3):
            self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_keywords_and_identifiers(self):
        """def and extern are keywords; everything else alphabetic is an identifier."""
        tokens = Lexer("def extern foo x1 Def externs").tokenize()
        self.assertEqual(
            [t.type for t in tokens],
            [TokenType.DEF, TokenType.EXTERN, TokenType.IDENTIFIER, TokenType.IDENTIFIER,
             TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF]
        )
        self.assertEqual([t.value for t in tokens[2:6]], ["foo", "x1", "Def", "externs"])
        self.assertIsNone(tokens[0].value)
        self.assertTrue(tokens[0].is_keyword)

    def test_identifier_stops_at_non_alphanumeric(self):
        """Underscores are not part of identifiers."""
        tokens = Lexer("abc_d").tokenize()
        self.assertEqual([t.type for t in tokens],
                         [TokenType.IDENTIFIER, TokenType.CHAR, TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(tokens[1].value, "_")

    def test_numbers(self):
        """Numeric literals carry float values."""
        tokens = Lexer("1 2.5 .25 10.").tokenize()
        self.assertTrue(all(t.type == TokenType.NUMBER for t in tokens[:-1]))
        self.assertEqual([t.value for t in tokens[:-1]], [1.0, 2.5, 0.25, 10.0])
        self.assertIsInstance(tokens[0].value, float)
        self.assertEqual(tokens[1].lexeme, "2.5")

    def test_number_followed_by_identifier(self):
        tokens = Lexer("4x").tokenize()
        self.assertEqual([t.type for t in tokens],
                         [TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.EOF])

    def test_malformed_number_is_permissive(self):
        """1.2.3 converts its longest valid prefix and records a warning."""
        lexer = Lexer("1.2.3")
        token = lexer.next_token()
        self.assertEqual(token.type, TokenType.NUMBER)
        self.assertEqual(token.lexeme, "1.2.3")
        self.assertEqual(token.value, 1.2)
        self.assertTrue(lexer.has_warnings())
        self.assertEqual(lexer.warnings[0].code, "L003")

    def test_lone_dot_is_zero(self):
        lexer = Lexer(".")
        token = lexer.next_token()
        self.assertEqual(token.type, TokenType.NUMBER)
        self.assertEqual(token.value, 0.0)
        self.assertEqual(len(lexer.warnings), 1)

    def test_malformed_number_warning_can_be_disabled(self):
        lexer = Lexer("1..2", config=LexerConfig(warn_on_malformed_numbers=False))
        self.assertEqual(lexer.next_token().value, 1.0)
        self.assertFalse(lexer.has_warnings())

    def test_single_characters(self):
        """Operators and punctuation come back as raw characters."""
        tokens = Lexer("( ) , ; + - * / < >").tokenize()
        self.assertTrue(all(t.type == TokenType.CHAR for t in tokens[:-1]))
        self.assertEqual([t.value for t in tokens[:-1]], list("(),;+-*/<>"))
        self.assertTrue(tokens[0].is_char("("))
        self.assertFalse(tokens[0].is_char(")"))

    def test_non_ascii_passes_through(self):
        """Non-ASCII characters are single-character tokens, not identifier parts."""
        tokens = Lexer("aé").tokenize()
        self.assertEqual([t.type for t in tokens],
                         [TokenType.IDENTIFIER, TokenType.CHAR, TokenType.EOF])
        self.assertEqual(tokens[1].value, "é")

    def test_comments_are_skipped(self):
        source = """
            def foo # this is a comment
            # another comment
            \t\t\t10
            """
        self.assertEqual(self._types(source),
                         [TokenType.DEF, TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.EOF])

    def test_comment_at_end_of_input(self):
        self.assertEqual(self._types("1 # trailing"), [TokenType.NUMBER, TokenType.EOF])

    def test_carriage_return_ends_comment(self):
        self.assertEqual(self._types("# c\rx"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_source_locations(self):
        """Tokens record line, column and character offset."""
        tokens = Lexer("a\n  b", filename="test.kal").tokenize()
        a, b = tokens[0], tokens[1]
        self.assertEqual((a.location.line, a.location.column, a.location.offset), (1, 1, 0))
        self.assertEqual((b.location.line, b.location.column, b.location.offset), (2, 3, 4))
        self.assertEqual(str(b.location), "test.kal:2:3")

    def test_stream_input(self):
        """The lexer reads from text streams as well as strings."""
        tokens = Lexer(io.StringIO("extern sin(x)")).tokenize()
        self.assertEqual([t.lexeme for t in tokens], ["extern", "sin", "(", "x", ")", ""])

    def test_read_fault_becomes_eof(self):
        """A failing read ends the token stream instead of raising."""
        lexer = Lexer(FaultyStream("ab "))
        with self.assertLogs("kaleidoscope.lexer.lexer", level="WARNING"):
            tokens = lexer.tokenize()
        self.assertEqual([t.type for t in tokens], [TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_retokenizing_is_deterministic(self):
        """Fresh sessions over identical input give identical tokens."""
        source = "def fib(x) fib(x-1)+fib(x-2) # recursion\n fib(10.5);"
        self.assertEqual(tokenize_string(source), tokenize_string(source))

    def test_token_str(self):
        tokens = Lexer("def 1").tokenize()
        self.assertEqual(str(tokens[0]), "DEF('def')")
        self.assertEqual(str(tokens[1]), "NUMBER('1' -> 1.0)")
        self.assertEqual(tokens[2].describe(), "end of input")

    def test_iteration_stops_after_eof(self):
        tokens = list(Lexer("x y"))
        self.assertEqual(len(tokens), 3)
        self.assertIsInstance(tokens[-1], Token)
        self.assertEqual(tokens[-1].type, TokenType.EOF)

    def test_tokenize_file(self):
        """Files are read as UTF-8 and locations carry the file path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "f.kal")
            with open(path, "w", encoding="utf-8") as f:
                f.write("def f(x)\n  x")
            tokens = tokenize_file(path)
        self.assertEqual([t.type for t in tokens], [
            TokenType.DEF, TokenType.IDENTIFIER, TokenType.CHAR,
            TokenType.IDENTIFIER, TokenType.CHAR, TokenType.IDENTIFIER, TokenType.EOF,
        ])
        self.assertTrue(all(t.location.filename == path for t in tokens))
        self.assertEqual(tokens[-2].location.line, 2)

    def test_tokenize_missing_file(self):
        with self.assertRaises(OSError):
            tokenize_file(os.path.join(os.path.dirname(__file__), "no_such_file.kal"))


if __name__ == '__main__':
    unittest.main()
