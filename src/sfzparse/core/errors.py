"""
Error types for SFZ tokenizing, literal parsing and scope resolution.
"""

from dataclasses import dataclass


class SfzError(Exception):
    """Base exception for all sfzparse errors."""

    def __init__(self, message: str, context: "ErrorContext | None" = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(SfzError):
    """
    Raised when SFZ text cannot be tokenized.

    Examples:
    - Unterminated block comment or header
    - Text that is neither a header, an opcode nor a comment
    """

    pass


class LiteralError(ParseError):
    """
    Raised when a literal is not a number of the expected kind.

    This is always fatal: the whole parse is aborted.
    """

    def __init__(
        self,
        literal: str,
        expected: str,
        context: "ErrorContext | None" = None,
    ):
        self.literal = literal
        self.expected = expected
        super().__init__(f"`{literal}` is not a valid {expected} number", context)


class BuilderError(SfzError):
    """
    Raised when the scope builder or an opcode map is misused.

    Examples:
    - Feeding tokens to a finished builder
    - Adding an opcode to a frozen map
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        source: Name of the source (file path or "<string>")
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line showing the error location
    """

    source: str
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        location = f"{self.source}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending line with a marker under the column."""
        if not self.snippet:
            return ""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_parse_error(
    message: str,
    source: str,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        source: Source name
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(source=source, line=line, column=column, snippet=snippet)
    return ParseError(message, context)


def make_literal_error(
    error: LiteralError,
    source: str,
    line: int,
    column: int,
    snippet: str | None = None,
) -> LiteralError:
    """Re-create a context-free LiteralError with its source location."""
    context = ErrorContext(source=source, line=line, column=column, snippet=snippet)
    return LiteralError(error.literal, error.expected, context)
