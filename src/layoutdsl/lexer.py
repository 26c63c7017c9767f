"""
Tokenizer for layoutdsl (Layer 1: Source Text → Token Stream).

Token classes:
    STRING   "Hello", "tab\\there", "\\u{2764}"
    NUMBER   1, 1.0, .5, 1e3, 1_000, -2, 0xff, 1.0f32, 2u8
    CHAR     'a', '\\n'
    BOOL     true, false
    IDENT    default_fmt, str_slice, _
    AMP      &
    SEMI     ;
    COMMA    ,
    LT       <
    GT       >
    EOF      (always last, positioned at the end of the source)

Syntax Notes:
    - Whitespace and // line comments are skipped
    - Literal, identifier and reference tokens never overlap, which is what
      lets the parser decide a value's kind from the first token or two
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from .errors import LayoutSyntaxError
from .model import Position


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    CHAR = "char"
    BOOL = "bool"
    IDENT = "identifier"
    AMP = "'&'"
    SEMI = "';'"
    COMMA = "','"
    LT = "'<'"
    GT = "'>'"
    EOF = "end of input"


LITERAL_KINDS = frozenset({TokenKind.STRING, TokenKind.NUMBER, TokenKind.CHAR, TokenKind.BOOL})

_KEYWORDS = {"true": True, "false": False}

_PUNCTUATION = {
    "&": TokenKind.AMP,
    ";": TokenKind.SEMI,
    ",": TokenKind.COMMA,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
}

_INT_SUFFIX = r"(?:[iu](?:8|16|32|64|128|size))"
_FLOAT_SUFFIX = r"(?:f(?:32|64))"
_DIGITS = r"\d[\d_]*"
_EXPONENT = r"[eE][+-]?\d[\d_]*"

_TOKEN_RE = re.compile(
    r"(?P<skip>\s+|//[^\n]*)"
    r"|(?P<string>\"(?:[^\"\\]|\\.)*\")"
    r"|(?P<char>'(?:[^'\\]|\\.|\\u\{[0-9a-fA-F]{1,6}\})')"
    r"|(?P<hex>-?0x[0-9a-fA-F_]+(?P<hex_suffix>" + _INT_SUFFIX + r")?)"
    r"|(?P<number>-?(?:" + _DIGITS + r"(?:\." + _DIGITS + r")?|\." + _DIGITS + r")"
    r"(?:" + _EXPONENT + r")?"
    r"(?P<suffix>" + _INT_SUFFIX + "|" + _FLOAT_SUFFIX + r")?)"
    r"|(?P<word>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<punct>[&;,<>])"
)

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]{1,6}\}|.)", re.DOTALL)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


@dataclass(frozen=True)
class Token:
    """
    One lexical token.

    Properties:
        kind: TokenKind
        text: Exact source spelling ("" for EOF)
        position: Where the token starts
        value: Decoded value for literal tokens, None otherwise
    """

    kind: TokenKind
    text: str
    position: Position
    value: Union[str, int, float, bool, None] = None

    @property
    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS

    @property
    def end(self) -> Position:
        """Position just past the last character of the token."""
        return advance_position(self.position, self.text)

    def describe(self) -> str:
        if self.kind is TokenKind.EOF:
            return self.kind.value
        return f"{self.kind.name.lower()} {self.text!r}"


def _unescape(body: str, position: Position) -> str:
    """Decode backslash escapes inside a string or char literal body."""

    def replace(match: "re.Match") -> str:
        escape = match.group(1)
        if escape.startswith("u{"):
            codepoint = int(escape[2:-1], 16)
            if codepoint > 0x10FFFF:
                raise LayoutSyntaxError(f"Invalid unicode escape '\\{escape}'", position)
            return chr(codepoint)
        if escape in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[escape]
        raise LayoutSyntaxError(f"Unknown escape sequence '\\{escape}'", position)

    return _ESCAPE_RE.sub(replace, body)


def _decode_number(text: str, suffix: str) -> Union[int, float]:
    """Convert a NUMBER token's spelling to a Python int or float."""
    digits = text[: len(text) - len(suffix)] if suffix else text
    digits = digits.replace("_", "")
    if suffix.startswith("f") or any(c in digits for c in ".eE"):
        return float(digits)
    return int(digits)


def advance_position(position: Position, text: str) -> Position:
    """Return the position just past `text`, starting at `position`."""
    newlines = text.count("\n")
    if newlines:
        column = len(text) - text.rfind("\n")
    else:
        column = position.column + len(text)
    return Position(
        offset=position.offset + len(text),
        line=position.line + newlines,
        column=column,
    )


def tokenize(source: str) -> List[Token]:
    """
    Split source text into tokens.

    Args:
        source: Layout description text

    Returns:
        List of tokens, always ending with a single EOF token

    Raises:
        LayoutSyntaxError: On an unterminated literal or an unknown character
    """
    tokens: List[Token] = []
    position = Position()
    index = 0

    while index < len(source):
        match = _TOKEN_RE.match(source, index)
        if match is None:
            char = source[index]
            if char == '"':
                raise LayoutSyntaxError("Unterminated string literal", position, expected='\'"\'')
            if char == "'":
                raise LayoutSyntaxError("Unterminated character literal", position, expected="\"'\"")
            raise LayoutSyntaxError(f"Unexpected character {char!r}", position)

        text = match.group(0)
        group = match.lastgroup

        if group == "string":
            tokens.append(Token(TokenKind.STRING, text, position, _unescape(text[1:-1], position)))
        elif group == "char":
            value = _unescape(text[1:-1], position)
            if len(value) != 1:
                raise LayoutSyntaxError("Character literal must hold exactly one character", position)
            tokens.append(Token(TokenKind.CHAR, text, position, value))
        elif group == "hex":
            suffix = match.group("hex_suffix") or ""
            digits = text[: len(text) - len(suffix)].replace("_", "")
            tokens.append(Token(TokenKind.NUMBER, text, position, int(digits, 16)))
        elif group == "number":
            tokens.append(Token(TokenKind.NUMBER, text, position, _decode_number(text, match.group("suffix") or "")))
        elif group == "word":
            if text in _KEYWORDS:
                tokens.append(Token(TokenKind.BOOL, text, position, _KEYWORDS[text]))
            else:
                tokens.append(Token(TokenKind.IDENT, text, position))
        elif group == "punct":
            tokens.append(Token(_PUNCTUATION[text], text, position))

        position = advance_position(position, text)
        index = match.end()

    tokens.append(Token(TokenKind.EOF, "", position))
    return tokens


__all__ = [
    "Token",
    "TokenKind",
    "LITERAL_KINDS",
    "advance_position",
    "tokenize",
]
