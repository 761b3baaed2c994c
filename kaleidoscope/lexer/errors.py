"""
Diagnostics for the Kaleidoscope lexer.

The lexer itself never fails: malformed input degrades to single-character
tokens and the parser rejects it. The only lexical diagnostic is a warning
for numeric literals that the permissive conversion had to truncate.
"""

from typing import Optional
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A located message with severity and an optional code and hint."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop tokenization.
    """

    def __init__(self, message: str, location: SourceLocation,
                 code: Optional[str] = None, help_text: Optional[str] = None):
        self.diagnostic = Diagnostic(message, location, "warning", code, help_text)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


def create_malformed_number_warning(lexeme: str, converted: str,
                                    location: SourceLocation) -> LexerWarning:
    """Create a warning for a numeric literal that was only partly converted."""
    if converted:
        help_text = f"Only the leading '{converted}' was used as the value."
    else:
        help_text = "No leading digits could be converted; the value is 0.0."

    return LexerWarning(
        message=f"Malformed numeric literal: '{lexeme}'",
        location=location,
        code="L003",
        help_text=help_text,
    )
