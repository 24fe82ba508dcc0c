"""
Lexer/Tokenizer for SFZ instrument text.

Converts raw SFZ text into a lazy stream of header and opcode tokens with
source location tracking. Whitespace, comments and preprocessor directives
are skipped. Opcode values are validated while tokenizing:

- a malformed numeric literal raises ``LiteralError`` (fatal)
- an out-of-range value drops the opcode
- an unknown opcode name or header name is ignored
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass

from .config import ParserConfig, load_config
from .errors import LiteralError, make_literal_error, make_parse_error
from .ir import HeaderKind, Opcode, build_opcode, lookup_opcode

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_HEADER_RE = re.compile(r"<([^<>\r\n]*)>")
_OPCODE_NAME_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)=")
_DIRECTIVE_RE = re.compile(r"#(define|include)\b[^\r\n]*")
# Single word: stops at whitespace, a header or a comment
_WORD_VALUE_RE = re.compile(r"(?:(?!//|/\*)[^\s<])*")
# Free text (paths, labels): stops at end of line, a header, the next
# name=value pair or a comment. A comment must open the value or follow
# whitespace so "a//b.wav" stays one path.
_FREE_VALUE_RE = re.compile(r"(?:(?!\s+[A-Za-z_][A-Za-z0-9_]*=|(?<=[=\s])/[/*])[^\r\n<])*")


@dataclass(frozen=True)
class HeaderToken:
    """A ``<header>`` token."""

    kind: HeaderKind
    line: int
    column: int

    def __repr__(self) -> str:
        return f"HeaderToken(<{self.kind.value}>, {self.line}:{self.column})"


@dataclass(frozen=True)
class OpcodeToken:
    """A validated ``name=value`` token."""

    opcode: Opcode
    line: int
    column: int

    def __repr__(self) -> str:
        return f"OpcodeToken({self.opcode.key}={self.opcode.value!r}, {self.line}:{self.column})"


Token = HeaderToken | OpcodeToken


class Lexer:
    """
    Lexer for SFZ text.

    The token stream is produced lazily and can only be walked once per
    call to ``tokens()``; calling it again restarts from the beginning.
    """

    def __init__(self, text: str, source: str = "<string>", config: ParserConfig | None = None):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            source: Source name (for error reporting)
            config: Parser options; read from the environment when omitted
        """
        self.text = text.removeprefix("\ufeff")
        self.source = source
        self.config = config or load_config()
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", self.text)]

    def location(self, pos: int) -> tuple[int, int]:
        """Get (line, column), both 1-indexed, of a character offset."""
        index = bisect_right(self._line_starts, pos) - 1
        return index + 1, pos - self._line_starts[index] + 1

    def line_text(self, line: int) -> str:
        start = self._line_starts[line - 1]
        end = self.text.find("\n", start)
        if end == -1:
            end = len(self.text)
        return self.text[start:end].rstrip("\r")

    def _error(self, message: str, pos: int):
        line, column = self.location(pos)
        return make_parse_error(message, self.source, line, column, self.line_text(line))

    def tokens(self) -> Iterator[Token]:
        """
        Tokenize the source text.

        Yields:
            Header and opcode tokens in source order

        Raises:
            ParseError: If a lexical error is encountered
            LiteralError: If an opcode value is not a valid number
        """
        text = self.text
        pos = 0
        end = len(text)

        while pos < end:
            # Whitespace
            m = _WHITESPACE_RE.match(text, pos)
            if m:
                pos = m.end()
                continue

            # Comments
            if text.startswith("//", pos):
                newline = text.find("\n", pos)
                pos = end if newline == -1 else newline
                continue
            if text.startswith("/*", pos):
                close = text.find("*/", pos + 2)
                if close == -1:
                    raise self._error("Unterminated block comment", pos)
                pos = close + 2
                continue

            ch = text[pos]

            # Headers
            if ch == "<":
                m = _HEADER_RE.match(text, pos)
                if not m:
                    raise self._error("Unterminated header", pos)
                header = self._header(m.group(1).strip(), pos)
                pos = m.end()
                if header is not None:
                    yield header
                continue

            # Preprocessor directives
            if ch == "#":
                m = _DIRECTIVE_RE.match(text, pos)
                if not m:
                    raise self._error(f"Unknown directive: {self._excerpt(pos)!r}", pos)
                line, _ = self.location(pos)
                logger.warning("%s:%d: ignoring unsupported #%s directive", self.source, line, m.group(1))
                pos = m.end()
                continue

            # Opcodes
            m = _OPCODE_NAME_RE.match(text, pos)
            if m:
                token, pos = self._opcode(m.group(1), pos, m.end())
                if token is not None:
                    yield token
                continue

            raise self._error(f"Unexpected text: {self._excerpt(pos)!r}", pos)

    def _excerpt(self, pos: int) -> str:
        m = _WORD_VALUE_RE.match(self.text, pos)
        word = m.group(0) if m else ""
        return word or self.text[pos]

    def _header(self, name: str, pos: int) -> HeaderToken | None:
        line, column = self.location(pos)
        try:
            kind = HeaderKind(name.lower())
        except ValueError:
            logger.warning("%s:%d: ignoring unknown header <%s>", self.source, line, name)
            return None
        return HeaderToken(kind, line, column)

    def _opcode(self, name: str, pos: int, value_pos: int) -> tuple[OpcodeToken | None, int]:
        """Read one opcode value starting at ``value_pos``. Returns (token, new position)."""
        found = lookup_opcode(name)
        free_text = found is None or found[0].kind.free_text
        value_re = _FREE_VALUE_RE if free_text else _WORD_VALUE_RE
        m = value_re.match(self.text, value_pos)
        assert m is not None
        raw = m.group(0).strip()
        next_pos = m.end()
        line, column = self.location(pos)

        if raw == "":
            raise self._error(f"Missing value for opcode '{name}'", pos)

        if found is None:
            level = logging.WARNING if self.config.warn_unknown_opcodes else logging.DEBUG
            logger.log(level, "%s:%d: ignoring unknown opcode '%s'", self.source, line, name)
            return None, next_pos

        definition, index = found
        try:
            opcode = build_opcode(definition, raw, index, self.config.normalize_separators)
        except LiteralError as e:
            raise make_literal_error(
                e, self.source, line, value_pos - self._line_starts[line - 1] + 1, self.line_text(line)
            ) from e

        if opcode is None:
            logger.debug("%s:%d: dropping out-of-range value %s=%s", self.source, line, name, raw)
            return None, next_pos
        return OpcodeToken(opcode, line, column), next_pos


def iter_tokens(
    text: str, source: str = "<string>", config: ParserConfig | None = None
) -> Iterator[Token]:
    """Lazily tokenize SFZ text."""
    return Lexer(text, source, config).tokens()


def tokenize(
    text: str, source: str = "<string>", config: ParserConfig | None = None
) -> list[Token]:
    """
    Convenience function to tokenize SFZ text.

    Args:
        text: Source text
        source: Source name

    Returns:
        List of tokens
    """
    return list(iter_tokens(text, source, config))
