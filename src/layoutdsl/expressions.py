"""
Expression System for layoutdsl

Every value the compiler reads or writes is an immutable expression node.
Nothing in here is evaluated; the nodes only say WHAT a value is and how it
was spelled in the source.

Two families live here:
    - Either values, produced by the parser for the text and spacing slots
      (Literal, Identifier, Reference)
    - Emitted format expressions, produced by the emitter for the format slot
      (Clone, DefaultConstructor)

ARCHITECTURAL RULE:
    No evaluation, no rendering. Backends and the executor decide what a node
    means for their target.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Expression(ABC):
    """
    Base class for all expression nodes.

    This class is structure only. It exists so that the model can say
    "any expression" in its type hints.
    """
    pass


class EitherKind(Enum):
    """
    The three shapes a parsed value can take.

    Literal, identifier and reference tokens are disjoint at the lexical
    level, so the kind is always decided by the first one or two tokens.
    """

    LITERAL = "literal"
    IDENTIFIER = "identifier"
    REFERENCE = "reference"


class Either(Expression):
    """
    A value in a text or spacing position.

    Exactly one of Literal, Identifier or Reference. Subclasses set `kind`.
    """

    kind: EitherKind


@dataclass(frozen=True)
class Literal(Either):
    """
    A literal token embedded verbatim.

    Examples:
        - "Hello"
        - 1.0
        - 2f32
        - true

    Properties:
        text: Exact source spelling of the token
        value: Decoded Python value (str, int, float, bool)

    IMPORTANT:
        Backends that re-emit source use `text`, never `value`, so that
        suffixes and escape spellings survive unchanged.
    """

    text: str
    value: Union[str, int, float, bool]

    kind = EitherKind.LITERAL


@dataclass(frozen=True)
class Identifier(Either):
    """
    A bare name, used by value.

    Examples:
        - str_slice
        - space
        - secondary_fmt

    This object does NOT check that the name is bound anywhere.
    """

    name: str

    kind = EitherKind.IDENTIFIER


@dataclass(frozen=True)
class Reference(Either):
    """
    An `&`-prefixed name, used by reference.

    Example:
        &string  ->  Reference("string")
    """

    name: str

    kind = EitherKind.REFERENCE


@dataclass(frozen=True)
class Clone(Expression):
    """
    "Clone of the named identifier".

    The compiler never copies a format value itself. It only emits this node,
    and whoever consumes the instruction calls `clone()` on the real value.
    """

    target: Identifier


@dataclass(frozen=True)
class DefaultConstructor(Expression):
    """Invoke the zero-value constructor of the format type."""
    pass


# Spacing emitted for every line that does not give one.
ZERO_SPACING = Literal(text="0.0", value=0.0)
