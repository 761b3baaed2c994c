"""
Kaleidoscope Lexer - turns a character stream into tokens, one at a time.

The lexer reads its input strictly left to right and keeps exactly one
pending character (the most recently read one that has not been consumed
into a token yet). Every call to next_token() starts fresh from that
character, so the lexer never has to buffer more than that.
"""

import io
import logging
import re
from typing import Iterator, List, Optional, TextIO, Union

from ..config import LexerConfig
from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, WHITESPACE_CHARS,
    ALPHA_CHARS, ALNUM_CHARS, NUMBER_CHARS, COMMENT_START, COMMENT_END_CHARS
)
from .errors import LexerWarning, create_malformed_number_warning

logger = logging.getLogger(__name__)

# Longest leading part of a digits/dots run that is a real float
_NUMBER_PREFIX = re.compile(r"[0-9]*(?:\.[0-9]*)?")


def convert_number(lexeme: str):
    """
    Permissively convert a run of digits and dots to a float.

    Only the longest leading `digits [. digits]` prefix is used, so
    '1.2.3' gives 1.2. A run with no convertible prefix (e.g. '.') gives 0.0.

    Returns:
        (value, converted_prefix)
    """
    prefix = _NUMBER_PREFIX.match(lexeme).group(0)
    try:
        return float(prefix), prefix
    except ValueError:
        return 0.0, ""


class Lexer:
    """
    Kaleidoscope lexical analyzer.

    Accepts either a source string or a text stream (file, stdin). Tokens are
    produced lazily by next_token(); tokenize() drains the whole input.
    """

    def __init__(self, source: Union[str, TextIO], filename: Optional[str] = None,
                 config: Optional[LexerConfig] = None):
        """
        Initialize the lexer.

        Args:
            source: Source code string, or a stream with a read(n) method
            filename: Name used in source locations (defaults to config.filename)
            config: Lexer configuration
        """
        self.config = config or LexerConfig()
        self.filename = filename or self.config.filename
        self._stream = io.StringIO(source) if isinstance(source, str) else source
        self.warnings: List[LexerWarning] = []

        # The pending character starts as a space so the first call reads input
        self.last_char = " "
        self._at_eof = False
        self._line = 1
        self._column = 0
        self._offset = -1

    def next_token(self) -> Token:
        """Return the next token from the input. Never raises."""
        while True:
            # Skip any whitespace
            while self.last_char in WHITESPACE_CHARS:
                self._advance()

            location = self._location()

            # identifier: [a-zA-Z][a-zA-Z0-9]*
            if self.last_char in ALPHA_CHARS:
                token = self._lex_identifier(location)

            # number: [0-9.]+
            elif self.last_char in NUMBER_CHARS:
                token = self._lex_number(location)

            elif self.last_char == COMMENT_START:
                # Comment until end of line
                while self.last_char and self.last_char not in COMMENT_END_CHARS:
                    self._advance()
                if self.last_char:
                    continue
                token = Token(TokenType.EOF, "", None, self._location())

            elif not self.last_char:
                token = Token(TokenType.EOF, "", None, location)

            else:
                # Otherwise, just return the character itself
                this_char = self.last_char
                self._advance()
                token = Token(TokenType.CHAR, this_char, this_char, location)

            logger.debug("token %s at %s", token, token.location)
            return token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining input.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def _lex_identifier(self, location: SourceLocation) -> Token:
        chars = []
        while self.last_char in ALNUM_CHARS:
            chars.append(self.last_char)
            self._advance()
        identifier = "".join(chars)

        keyword = KEYWORDS.get(identifier)
        if keyword is not None:
            return Token(keyword, identifier, None, location)
        return Token(TokenType.IDENTIFIER, identifier, identifier, location)

    def _lex_number(self, location: SourceLocation) -> Token:
        chars = []
        while self.last_char in NUMBER_CHARS:
            chars.append(self.last_char)
            self._advance()
        lexeme = "".join(chars)

        value, converted = convert_number(lexeme)
        if converted != lexeme and self.config.warn_on_malformed_numbers:
            warning = create_malformed_number_warning(lexeme, converted, location)
            self.warnings.append(warning)
            logger.debug("malformed number %r read as %r", lexeme, value)

        return Token(TokenType.NUMBER, lexeme, value, location)

    def _advance(self):
        """Read the next character into last_char ('' once input is exhausted)."""
        if self._at_eof:
            self.last_char = ""
            return

        try:
            char = self._stream.read(1)
        except (OSError, UnicodeDecodeError) as e:
            # A read fault ends the input like EOF does
            logger.warning("read error in %s, treating as end of input: %s", self.filename, e)
            char = ""

        if not char:
            self._at_eof = True
            self.last_char = ""
            return

        if self.last_char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        self._offset += 1
        self.last_char = char

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._line, self._column, self._offset)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for source locations

    Returns:
        List of tokens ending with EOF
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        IOError: If file cannot be opened
    """
    with open(filepath, "r", encoding="utf-8") as f:
        return Lexer(f, filepath).tokenize()
