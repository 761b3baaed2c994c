"""
Kaleidoscope Recursive Descent Parser

Primary expressions are parsed by recursive descent; binary operator chains
are resolved by precedence climbing against a table of single-character
operators. The parser holds exactly one token of lookahead (current_token)
and pulls tokens from the lexer on demand.
"""

import logging
from typing import List, Optional, TextIO, Union

from ..config import ParserConfig
from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    Expr, NumberExpr, VariableExpr, BinaryExpr, CallExpr, Prototype, FunctionDef
)
from .errors import (
    IncompleteArgumentListError, IncompletePrototypeError, NestingTooDeepError,
    create_invalid_expression_error, create_unclosed_paren_error,
    create_missing_keyword_error
)

logger = logging.getLogger(__name__)


class Parser:
    """
    Kaleidoscope parser.

    Every public parse_* method consumes tokens starting at current_token and
    either returns a finished node or raises a ParseError. A failed parse
    leaves current_token at (or just past) the offending token; recovering
    from there is the caller's job.
    """

    def __init__(self, source: Union[Lexer, str, TextIO], config: Optional[ParserConfig] = None,
                 filename: Optional[str] = None):
        """
        Initialize the parser and prime the lookahead token.

        Args:
            source: A Lexer, or a source string / text stream to lex
            config: Parser configuration
            filename: Filename for source locations when `source` is not a Lexer
        """
        self.config = config or ParserConfig()
        self.lexer = source if isinstance(source, Lexer) else Lexer(source, filename)
        self._depth = 0
        self._deepest = 0
        self.current_token: Token = self.lexer.next_token()

    def get_next_token(self) -> Token:
        """Advance the cursor and return the new current token."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def get_token_precedence(self) -> int:
        """Precedence of the current token, or -1 if it is not a binary operator."""
        token = self.current_token
        if token.type != TokenType.CHAR:
            return -1
        return self.config.binop_precedence.get(token.value, -1)

    # Top-level entry points

    def parse_expression(self) -> Expr:
        """expression ::= primary binoprhs"""
        self._trace("expression")
        if self._depth >= self.config.max_nesting_depth:
            raise NestingTooDeepError(self.config.max_nesting_depth, self.current_token)

        self._depth += 1
        self._deepest = max(self._deepest, self._depth)
        try:
            lhs = self._parse_primary()
            return self._parse_bin_op_rhs(0, lhs)
        except RecursionError:
            # The interpreter stack ran out before the configured limit did.
            # Only the outermost call converts, once the stack has unwound.
            if self._depth > 1:
                raise
            logger.debug("interpreter recursion limit hit at %s", self.current_token.location)
            raise NestingTooDeepError(self._deepest, self.current_token) from None
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._deepest = 0

    def parse_prototype(self) -> Prototype:
        """prototype ::= id '(' id* ')'"""
        self._trace("prototype")
        name_token = self.current_token
        if name_token.type != TokenType.IDENTIFIER:
            raise IncompletePrototypeError(
                "expected function name in prototype", "function name", name_token
            )
        self.get_next_token()

        if not self.current_token.is_char("("):
            raise IncompletePrototypeError(
                "expected function argument list in prototype", "'('", self.current_token
            )

        params: List[str] = []
        while self.get_next_token().type == TokenType.IDENTIFIER:
            params.append(self.current_token.value)

        if not self.current_token.is_char(")"):
            raise IncompletePrototypeError(
                "expected ')' in prototype", "')' or a parameter name", self.current_token
            )
        self.get_next_token()  # eat ')'

        return Prototype(name_token.value, tuple(params), location=name_token.location)

    def parse_definition(self) -> FunctionDef:
        """definition ::= 'def' prototype expression"""
        self._trace("definition")
        def_token = self._expect_keyword(TokenType.DEF, "definition")
        prototype = self.parse_prototype()
        body = self.parse_expression()
        return FunctionDef(prototype, body, location=def_token.location)

    def parse_extern(self) -> Prototype:
        """external ::= 'extern' prototype"""
        self._trace("extern")
        self._expect_keyword(TokenType.EXTERN, "extern declaration")
        return self.parse_prototype()

    def parse_top_level_expression(self) -> FunctionDef:
        """toplevelexpr ::= expression, wrapped in an anonymous function"""
        self._trace("top-level expression")
        location = self.current_token.location
        body = self.parse_expression()
        prototype = Prototype("", (), location=location)
        return FunctionDef(prototype, body, location=location)

    # Primary expressions

    def _parse_primary(self) -> Expr:
        """
        primary
          ::= identifierexpr
          ::= numberexpr
          ::= parenexpr
        """
        token = self.current_token
        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expr()
        if token.type == TokenType.NUMBER:
            return self._parse_number_expr()
        if token.is_char("("):
            return self._parse_paren_expr()
        raise create_invalid_expression_error(token)

    def _parse_number_expr(self) -> NumberExpr:
        """numberexpr ::= number"""
        token = self.current_token
        self.get_next_token()  # consume the number
        return NumberExpr(token.value, location=token.location)

    def _parse_paren_expr(self) -> Expr:
        """parenexpr ::= '(' expression ')'"""
        self.get_next_token()  # eat '('
        expr = self.parse_expression()
        if not self.current_token.is_char(")"):
            raise create_unclosed_paren_error(self.current_token)
        self.get_next_token()  # eat ')'
        return expr

    def _parse_identifier_expr(self) -> Expr:
        """
        identifierexpr
          ::= identifier
          ::= identifier '(' expression* ')'
        """
        id_token = self.current_token
        self.get_next_token()  # eat identifier

        if not self.current_token.is_char("("):
            return VariableExpr(id_token.value, location=id_token.location)

        self._trace("call")
        self.get_next_token()  # eat '('
        args: List[Expr] = []
        if not self.current_token.is_char(")"):
            while True:
                args.append(self.parse_expression())

                if self.current_token.is_char(")"):
                    break
                if not self.current_token.is_char(","):
                    raise IncompleteArgumentListError(self.current_token)
                self.get_next_token()  # eat ','

        self.get_next_token()  # eat ')'
        return CallExpr(id_token.value, tuple(args), location=id_token.location)

    # Binary operators

    def _parse_bin_op_rhs(self, min_prec: int, lhs: Expr) -> Expr:
        """
        binoprhs ::= (binop primary)*

        min_prec is the lowest operator precedence this call may consume.
        Non-operators have precedence -1, so the loop always stops at them.
        """
        while True:
            tok_prec = self.get_token_precedence()
            if tok_prec < min_prec:
                return lhs

            op_token = self.current_token
            self.get_next_token()  # eat binop

            rhs = self._parse_primary()

            # If the next operator binds tighter, let it take rhs as its lhs
            next_prec = self.get_token_precedence()
            if tok_prec < next_prec:
                rhs = self._parse_bin_op_rhs(tok_prec + 1, rhs)

            lhs = BinaryExpr(op_token.value, lhs, rhs, location=op_token.location)

    # Utility methods

    def _expect_keyword(self, keyword: TokenType, rule: str) -> Token:
        token = self.current_token
        if token.type != keyword:
            raise create_missing_keyword_error(keyword, rule, token)
        self.get_next_token()
        return token

    def _trace(self, rule: str):
        if self.config.trace:
            logger.debug("parse %s at %s (current %s)", rule, self.current_token.location, self.current_token)


def parse_expression_string(source: str, config: Optional[ParserConfig] = None) -> Expr:
    """
    Convenience function to parse a single expression.

    Raises:
        ParseError: If parsing fails
    """
    return Parser(source, config, filename="<string>").parse_expression()
