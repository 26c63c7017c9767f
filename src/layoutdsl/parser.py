"""
Parser for layoutdsl (Layer 2: Token Stream → Program).

Grammar:
    program  := (identifier ';')? line (',' line)* ','?
    line     := either (either)? ('<' identifier '>')?
    either   := literal | identifier | '&' identifier

Every decision is made from at most two tokens of lookahead. Literal,
identifier and reference tokens are disjoint, so whether an optional value
is present is answered by the token class alone and nothing is ever
backtracked.
"""

import logging
from enum import Enum
from typing import List, Optional, Union

from .emitter import resolve_default_format
from .errors import LayoutParseError, LayoutSyntaxError, MissingRequiredField
from .expressions import Either, EitherKind, Identifier, Literal, Reference
from .lexer import Token, TokenKind, tokenize
from .model import Line, Program

log = logging.getLogger(__name__)


class ParserState(Enum):
    START = "start"
    PARSING_HEADER = "parsing_header"
    PARSING_LINES = "parsing_lines"
    DONE = "done"
    ERROR = "error"


class TokenCursor:
    """Peekable read position over a token list that ends with EOF."""

    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def at(self, kind: TokenKind, offset: int = 0) -> bool:
        return self.peek(offset).kind is kind

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def expect(self, kind: TokenKind, context: str = "") -> Token:
        """Consume a token of `kind` or raise LayoutSyntaxError at the current token."""
        token = self.peek()
        if token.kind is not kind:
            where = f" {context}" if context else ""
            position = token.position
            # Running out of input is reported right after the last token, not after trailing whitespace
            if token.kind is TokenKind.EOF and self.pos > 0:
                position = self.tokens[self.pos - 1].end
            raise LayoutSyntaxError(
                f"Expected {kind.value}{where}, found {token.describe()}",
                position,
                expected=kind.value,
            )
        return self.advance()


def peek_value_kind(cursor: TokenCursor) -> Optional[EitherKind]:
    """
    Decide what kind of value starts at the cursor, without consuming.

    Returns:
        EitherKind, or None when no value starts here
    """
    token = cursor.peek()
    if token.is_literal:
        return EitherKind.LITERAL
    if token.kind is TokenKind.IDENT:
        return EitherKind.IDENTIFIER
    if token.kind is TokenKind.AMP and cursor.at(TokenKind.IDENT, 1):
        return EitherKind.REFERENCE
    return None


def value_present(cursor: TokenCursor) -> bool:
    return peek_value_kind(cursor) is not None


def classify_value(cursor: TokenCursor) -> Optional[Either]:
    """
    Consume the value at the cursor if there is one.

    First match wins: literal token, bare identifier, `&` + identifier.
    Anything else leaves the cursor untouched and returns None, which lets
    callers treat a position as optional.
    """
    kind = peek_value_kind(cursor)
    if kind is None:
        return None

    if kind is EitherKind.LITERAL:
        token = cursor.advance()
        return Literal(text=token.text, value=token.value)

    if kind is EitherKind.IDENTIFIER:
        return Identifier(cursor.advance().text)

    cursor.advance()  # '&'
    return Reference(cursor.advance().text)


class LayoutParser:
    """
    Single-use parser for one layout description.

    Usage:
        program = LayoutParser(tokenize(source)).parse_program()
    """

    def __init__(self, tokens: List[Token]):
        self.cursor = TokenCursor(tokens)
        self.state = ParserState.START

    def parse_line(self) -> Line:
        """Parse `either (either)? ('<' identifier '>')?`."""
        start = self.cursor.peek()

        text = classify_value(self.cursor)
        if text is None:
            if start.kind is TokenKind.AMP:
                self.cursor.advance()
                self.cursor.expect(TokenKind.IDENT, "after '&'")
            raise MissingRequiredField("text", start.position)

        spacing = classify_value(self.cursor) if value_present(self.cursor) else None

        fmt = None
        if self.cursor.at(TokenKind.LT):
            self.cursor.advance()
            fmt = Identifier(self.cursor.expect(TokenKind.IDENT, "in format reference").text)
            self.cursor.expect(TokenKind.GT, "to close format reference")

        return Line(text=text, spacing=spacing, format=fmt, position=start.position)

    def parse_header(self) -> Optional[Identifier]:
        """Parse the optional `identifier ';'` default-format header."""
        self.state = ParserState.PARSING_HEADER
        if not self.cursor.at(TokenKind.IDENT):
            return None
        header = Identifier(self.cursor.advance().text)
        self.cursor.expect(TokenKind.SEMI, "after default format")
        return header

    def parse_program(self) -> Program:
        """
        Parse a whole layout description.

        Returns:
            Program with the resolved default format and lines in order

        Raises:
            LayoutSyntaxError: If the tokens do not match the grammar
            MissingRequiredField: If a line has no leading text value
        """
        if self.state is not ParserState.START:
            raise RuntimeError("LayoutParser instances are single-use")

        try:
            header = self.parse_header()
            default_format = resolve_default_format(header)

            self.state = ParserState.PARSING_LINES
            lines = []
            while not self.cursor.at(TokenKind.EOF):
                lines.append(self.parse_line())
                if self.cursor.at(TokenKind.EOF):
                    break
                self.cursor.expect(TokenKind.COMMA, "between lines")
        except LayoutParseError:
            self.state = ParserState.ERROR
            raise

        self.state = ParserState.DONE
        log.debug("Parsed %d line(s), header=%s", len(lines), header.name if header else None)
        return Program(default_format=default_format, lines=tuple(lines), header=header)


def parse_program(source: Union[str, List[Token]]) -> Program:
    """
    Parse source text (or an already tokenized stream) into a Program.

    Args:
        source: Layout description text, or a token list ending in EOF

    Returns:
        Program

    Raises:
        LayoutSyntaxError, MissingRequiredField
    """
    tokens = tokenize(source) if isinstance(source, str) else list(source)
    return LayoutParser(tokens).parse_program()


__all__ = [
    "LayoutParser",
    "ParserState",
    "TokenCursor",
    "classify_value",
    "parse_program",
    "peek_value_kind",
    "value_present",
]
