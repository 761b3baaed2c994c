"""
Top-level driver for the Kaleidoscope front end.

Reads a whole input as a sequence of top-level units (definitions, extern
declarations and bare expressions), hands each successfully parsed unit to an
optional code generator, and recovers from parse errors by skipping to the
next statement boundary.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, TextIO, Union

from .config import ParserConfig
from .lexer.lexer import Lexer
from .lexer.tokens import Token, TokenType
from .parser.ast_nodes import FunctionDef, Prototype
from .parser.errors import ParseError
from .parser.parser import Parser

logger = logging.getLogger(__name__)


class CodeGenerator(Protocol):
    """
    What the driver needs from a backend.

    Both methods receive a self-contained unit and report their own errors
    through their return value; the driver only collects what they return.
    """

    def define(self, function: FunctionDef) -> Any:
        ...

    def declare_extern(self, prototype: Prototype) -> Any:
        ...


@dataclass
class DriverResult:
    """Everything a driver run produced, in source order."""
    units: List[Union[FunctionDef, Prototype]] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    codegen_results: List[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def definitions(self) -> List[FunctionDef]:
        return [u for u in self.units if isinstance(u, FunctionDef) and not u.prototype.is_anonymous]

    @property
    def externs(self) -> List[Prototype]:
        return [u for u in self.units if isinstance(u, Prototype)]

    @property
    def top_level_expressions(self) -> List[FunctionDef]:
        return [u for u in self.units if isinstance(u, FunctionDef) and u.prototype.is_anonymous]


class Driver:
    """
    Batch top-level loop.

    top ::= definition | external | expression | ';'
    """

    def __init__(self, parser: Parser, codegen: Optional[CodeGenerator] = None):
        self.parser = parser
        self.codegen = codegen
        self.result = DriverResult()

    def run(self) -> DriverResult:
        """Parse until end of input."""
        while True:
            token = self.parser.current_token
            if token.type == TokenType.EOF:
                break
            if token.is_char(";"):
                # ignore top-level semicolons
                self.parser.get_next_token()
            elif token.type == TokenType.DEF:
                self.handle_definition()
            elif token.type == TokenType.EXTERN:
                self.handle_extern()
            else:
                self.handle_top_level_expression()

        return self.result

    def handle_definition(self) -> Optional[FunctionDef]:
        start = self.parser.current_token
        try:
            function = self.parser.parse_definition()
        except ParseError as e:
            self._recover(e, start)
            return None

        logger.info("Parsed a function definition: %s", function.name)
        self._emit(function)
        return function

    def handle_extern(self) -> Optional[Prototype]:
        start = self.parser.current_token
        try:
            prototype = self.parser.parse_extern()
        except ParseError as e:
            self._recover(e, start)
            return None

        logger.info("Parsed an extern: %s", prototype.name)
        self._emit(prototype)
        return prototype

    def handle_top_level_expression(self) -> Optional[FunctionDef]:
        start = self.parser.current_token
        try:
            function = self.parser.parse_top_level_expression()
        except ParseError as e:
            self._recover(e, start)
            return None

        logger.info("Parsed a top-level expression")
        self._emit(function)
        return function

    def synchronize(self, start: Token):
        """
        Skip ahead to the next statement boundary (';', 'def', 'extern' or EOF).

        At least one token is consumed unless the failed unit already moved
        past `start` and stopped right on a boundary.
        """
        if self.parser.current_token is start or not self._at_boundary():
            self.parser.get_next_token()
        while not self._at_boundary():
            self.parser.get_next_token()

    def _at_boundary(self) -> bool:
        token = self.parser.current_token
        return (token.type in (TokenType.EOF, TokenType.DEF, TokenType.EXTERN)
                or token.is_char(";"))

    def _recover(self, error: ParseError, start: Token):
        self.result.errors.append(error)
        logger.error("Error: %s (at %s)", error.message, error.location)
        self.synchronize(start)

    def _emit(self, unit: Union[FunctionDef, Prototype]):
        self.result.units.append(unit)
        if self.codegen is None:
            return
        if isinstance(unit, Prototype):
            outcome = self.codegen.declare_extern(unit)
        else:
            outcome = self.codegen.define(unit)
        self.result.codegen_results.append(outcome)


def parse_source(source: Union[str, TextIO], filename: str = "<string>",
                 codegen: Optional[CodeGenerator] = None,
                 config: Optional[ParserConfig] = None) -> DriverResult:
    """
    Convenience function to run the driver over a whole source.

    Args:
        source: Source code string or text stream
        filename: Filename for source locations
        codegen: Optional backend receiving each parsed unit
        config: Parser configuration

    Returns:
        DriverResult with parsed units and collected errors
    """
    parser = Parser(Lexer(source, filename), config)
    return Driver(parser, codegen).run()
