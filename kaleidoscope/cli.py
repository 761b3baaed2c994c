"""
Command line front end: parse a Kaleidoscope file and print its AST.

    kaleidoscope-parse program.kal
    kaleidoscope-parse --tokens program.kal
    echo "def f(x) x * 2" | kaleidoscope-parse
"""

import argparse
import logging
import sys
from typing import List, Optional

from .lexer.lexer import Lexer
from .config import ParserConfig
from .driver import Driver
from .parser.ast_printer import dump
from .parser.parser import Parser

logger = logging.getLogger("kaleidoscope")


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kaleidoscope-parse",
        description="Parse Kaleidoscope source and dump the resulting AST",
    )
    parser.add_argument("file", nargs="?", type=argparse.FileType("r"), default=None,
                        help="Kaleidoscope source file (reads stdin if omitted)")
    parser.add_argument("--tokens", action="store_true",
                        help="Print the token stream instead of the AST")
    parser.add_argument("--max-depth", type=positive_int, default=ParserConfig().max_nesting_depth,
                        help="Maximum expression nesting depth")
    parser.add_argument("--trace", action="store_true",
                        help="Trace grammar rules (implies --verbose)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    level = logging.DEBUG if (args.verbose or args.trace) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    stream = args.file or sys.stdin
    filename = getattr(stream, "name", "<stdin>")
    lexer = Lexer(stream, filename)

    try:
        if args.tokens:
            for token in lexer:
                print(f"{token.location}\t{token}")
            status = 0
        else:
            config = ParserConfig(max_nesting_depth=args.max_depth, trace=args.trace)
            result = Driver(Parser(lexer, config)).run()
            for unit in result.units:
                print(dump(unit))
            for error in result.errors:
                print(f"Error: {error.message} ({error.location})", file=sys.stderr)
            status = 0 if result.ok else 1
    finally:
        if args.file is not None:
            args.file.close()

    for warning in lexer.warnings:
        logger.warning("%s at %s", warning.message, warning.diagnostic.location)

    return status


if __name__ == "__main__":
    sys.exit(main())
