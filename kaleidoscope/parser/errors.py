"""
Error handling for the Kaleidoscope parser.

Every grammar rule raises a ParseError subtype the moment a required token
or sub-rule is missing. Errors carry a diagnostic with the source location of
the offending token so that a driver can report them and resynchronize.
"""

from typing import Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(self, message: str, location: SourceLocation, token: Optional[Token] = None,
                 code: Optional[str] = None, help_text: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(message, location, "error", code, help_text)
        self.token = token

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """The current token does not match what a grammar rule expects."""

    def __init__(self, message: str, rule: str, expected: str, found: Token, code: str = "P001"):
        help_text = f"While parsing {rule}, expected {expected} but found {found.describe()}."
        super().__init__(message, found.location, token=found, code=code, help_text=help_text)
        self.rule = rule
        self.expected = expected
        self.found = found


class IncompleteArgumentListError(UnexpectedTokenError):
    """A call's argument list is not continued with ',' or closed with ')'."""

    def __init__(self, found: Token):
        super().__init__(
            "expected ')' or ',' in argument list",
            rule="call",
            expected="')' or ','",
            found=found,
            code="P004",
        )


class IncompletePrototypeError(UnexpectedTokenError):
    """A function prototype is missing its name, '(' or ')'."""

    def __init__(self, message: str, expected: str, found: Token):
        super().__init__(message, rule="prototype", expected=expected, found=found, code="P008")


class NestingTooDeepError(ParseError):
    """Expressions are nested deeper than the parser allows."""

    def __init__(self, limit: int, found: Token):
        super().__init__(
            f"expression nesting exceeds the maximum depth of {limit}",
            found.location,
            token=found,
            code="P013",
            help_text="Split the expression into smaller functions.",
        )
        self.limit = limit


# Helper functions for creating common parser errors

def create_invalid_expression_error(found: Token) -> UnexpectedTokenError:
    """Create an error for a token that cannot start an expression."""
    return UnexpectedTokenError(
        "unexpected token while expecting an expression",
        rule="expression",
        expected="a number, identifier or '('",
        found=found,
        code="P005",
    )


def create_unclosed_paren_error(found: Token) -> UnexpectedTokenError:
    """Create an error for a parenthesized expression missing its ')'."""
    return UnexpectedTokenError(
        "expected ')'",
        rule="parenthesized expression",
        expected="')'",
        found=found,
        code="P012",
    )


def create_missing_keyword_error(keyword: TokenType, rule: str, found: Token) -> UnexpectedTokenError:
    """Create an error for a definition/extern that does not start with its keyword."""
    word = keyword.name.lower()
    return UnexpectedTokenError(f"expected '{word}'", rule=rule, expected=f"'{word}'", found=found)
