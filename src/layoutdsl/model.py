"""
Core Layout Model Objects

Defines the data structures that flow through one compilation:
    - Position (where a token sits in the source)
    - Line (one styled run as written)
    - Program (the parsed header and lines)
    - Append (one emitted builder instruction)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about Python/Rust/any render target
        - Are immutable (frozen) once built
        - Are fully serializable
        - Live for exactly one compilation
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .expressions import Either, Expression, Identifier


@dataclass(frozen=True)
class Position:
    """
    A location in the source text.

    Properties:
        offset: 0-based character offset
        line: 1-based line number
        column: 1-based column number
    """

    offset: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class Line:
    """
    One `text [spacing] [<format>]` construct.

    Properties:
        text:
            Mandatory leading value (Literal, Identifier or Reference)

        spacing:
            Optional second value. None when the source gave no spacing.

        format:
            Optional bracketed format name. None when the source gave none.

        position:
            Where the line starts. Not part of equality so that two lines
            spelled the same compare equal wherever they appear.
    """

    text: Either
    spacing: Optional[Either] = None
    format: Optional[Identifier] = None
    position: Position = field(default_factory=Position, compare=False)


@dataclass(frozen=True)
class Program:
    """
    Root container for one parsed layout description.

    Properties:
        default_format:
            Resolved default expression. Clone(header) when a header was
            given, DefaultConstructor() otherwise.

        lines:
            Lines in declaration order. This order is the only ordering
            guarantee carried into emission.

        header:
            The raw header identifier, or None.
    """

    default_format: Expression
    lines: Tuple[Line, ...] = ()
    header: Optional[Identifier] = None

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Append:
    """
    One builder instruction: `job.append(text, spacing, format)`.

    Properties:
        text: The line's text value, as parsed
        spacing: The line's spacing, or the 0.0 literal
        format: Clone(...) or DefaultConstructor()
    """

    text: Either
    spacing: Either
    format: Expression
